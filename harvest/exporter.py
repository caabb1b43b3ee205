"""
harvest/exporter.py  —  Excel and CSV export of a harvest plan
"""

import csv
import logging
from datetime import datetime
from typing import Optional

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from harvest.models import HarvestPlan

logger = logging.getLogger(__name__)

# ── Colour constants ──────────────────────────────────────────────────────────
HEADER_BG  = "1A237E"
HEADER_FG  = "FFFFFF"
SUBHEAD_BG = "283593"
POS_FG     = "1B5E20"
NEG_FG     = "B71C1C"
ALT_ROW    = "E8EAF6"

INR     = "₹#,##,##0.00"
INR_NEG = "₹#,##,##0.00;[Red]-₹#,##,##0.00"

CSV_FIELDS = ["rank", "ticker", "name", "tax_category", "quantity", "buy_price",
              "current_price", "holding_period_days", "loss_amount", "tax_saving",
              "action", "rebuy_suggestion"]

def _border():
    s = Side(style="thin", color="BDBDBD")
    return Border(left=s, right=s, top=s, bottom=s)

def _header_font(bold=True, size=10):
    return Font(name="Arial", size=size, bold=bold, color=HEADER_FG)

def _header_fill(bg=HEADER_BG):
    return PatternFill("solid", fgColor=bg)

def _style(cell, value=None, font=None, fill=None, fmt=None, align="left"):
    if value is not None: cell.value = value
    if font:  cell.font = font
    if fill:  cell.fill = fill
    if fmt:   cell.number_format = fmt
    cell.border    = _border()
    cell.alignment = Alignment(horizontal=align)
    return cell

def _default_name(ext: str) -> str:
    return f"harvest_plan_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{ext}"

# ── Public API ────────────────────────────────────────────────────────────────
def export_plan_to_excel(plan: HarvestPlan, filename: Optional[str] = None) -> str:
    filename = filename or _default_name("xlsx")
    wb = openpyxl.Workbook()
    _plan_sheet(wb, plan)
    _scenario_sheet(wb, plan)
    if "Sheet" in wb.sheetnames:
        del wb["Sheet"]
    wb.save(filename)
    logger.info("Wrote harvest plan workbook %s (%d rows)", filename,
                len(plan.recommendations))
    return filename

def export_plan_to_csv(plan: HarvestPlan, filename: Optional[str] = None) -> str:
    filename = filename or _default_name("csv")
    with open(filename, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        w.writeheader()
        for rank, rec in enumerate(plan.recommendations, 1):
            h = rec.holding
            w.writerow({"rank": rank, "ticker": h.ticker, "name": h.name,
                        "tax_category":        h.category.value,
                        "quantity":            h.quantity,
                        "buy_price":           round(h.buy_price, 2),
                        "current_price":       round(h.current_price, 2),
                        "holding_period_days": h.holding_period_days,
                        "loss_amount":         round(rec.loss_amount, 2),
                        "tax_saving":          round(rec.tax_saving, 2),
                        "action":              rec.action,
                        "rebuy_suggestion":    rec.rebuy_suggestion})
    logger.info("Wrote harvest plan CSV %s (%d rows)", filename, len(plan.recommendations))
    return filename

# ── Harvest plan sheet ────────────────────────────────────────────────────────
def _plan_sheet(wb, plan: HarvestPlan):
    ws = wb.create_sheet("Harvest Plan")

    # Title rows
    for row, text, size in [(1, "Tax-Loss Harvest Plan", 16),
                            (2, f"Evaluated as of {plan.evaluation_date:%d %b %Y}", 10)]:
        ws.merge_cells(f"A{row}:I{row}")
        c = ws[f"A{row}"]
        c.value = text
        c.font  = Font(name="Arial", size=size, bold=(row==1), italic=(row==2), color=HEADER_FG)
        c.fill  = _header_fill(HEADER_BG if row==1 else SUBHEAD_BG)
        c.alignment = Alignment(horizontal="center", vertical="center")
    ws.row_dimensions[1].height = 30

    headers = ["#", "Ticker", "Name", "Tax", "Quantity", "Held (days)",
               "Loss (₹)", "Tax Saving (₹)", "Action"]
    for col, h in enumerate(headers, 1):
        _style(ws.cell(4, col, h), font=_header_font(), fill=_header_fill(), align="center")
    ws.row_dimensions[4].height = 20

    for i, rec in enumerate(plan.recommendations):
        row  = 5 + i
        h    = rec.holding
        fill = PatternFill("solid", fgColor=ALT_ROW if i%2==0 else "FFFFFF")
        vals = [i + 1, h.ticker, h.name, h.category.value, h.quantity,
                h.holding_period_days, rec.loss_amount, rec.tax_saving, rec.action]
        fmts = [None, None, None, None, "#,##0", "#,##0", INR, INR, None]
        for col, (val, fmt) in enumerate(zip(vals, fmts), 1):
            cell = ws.cell(row, col, val)
            cell.font   = Font(name="Arial", size=10)
            cell.fill   = fill
            cell.border = _border()
            cell.alignment = Alignment(horizontal="right" if col in (1, 5, 6, 7, 8) else "left")
            if fmt: cell.number_format = fmt
            if col == 7: cell.font = Font(name="Arial", size=10, color=NEG_FG)
            if col == 8: cell.font = Font(name="Arial", size=10, color=POS_FG)

    # Totals row
    tr   = 5 + len(plan.recommendations)
    bold = Font(name="Arial", bold=True, color=HEADER_FG)
    for col in range(1, 10):
        ws.cell(tr, col).fill   = _header_fill(SUBHEAD_BG)
        ws.cell(tr, col).border = _border()
    _style(ws.cell(tr, 2, "TOTAL"), font=bold)
    _style(ws.cell(tr, 7, plan.total_loss_harvested), font=bold, fmt=INR, align="right")
    _style(ws.cell(tr, 8, plan.total_tax_saving), font=bold, fmt=INR, align="right")

    for i, w in enumerate([5, 12, 24, 7, 10, 11, 16, 16, 30], 1):
        ws.column_dimensions[get_column_letter(i)].width = w
    ws.freeze_panes = "A5"

# ── Before / after sheet ──────────────────────────────────────────────────────
def _scenario_sheet(wb, plan: HarvestPlan):
    ws = wb.create_sheet("Tax Scenarios")
    ws.merge_cells("A1:D1")
    _style(ws["A1"], "Before vs After Harvesting",
           font=Font(name="Arial", size=14, bold=True, color=HEADER_FG),
           fill=_header_fill(), align="center")

    for col, h in enumerate(["", plan.before.label, plan.after.label, "Difference"], 1):
        _style(ws.cell(3, col, h), font=_header_font(), fill=_header_fill(), align="center")

    b, a = plan.before.liability, plan.after.liability
    rows = [
        ("STCG gains",      b.stcg_gains,   a.stcg_gains),
        ("STCG losses",     b.stcg_losses,  a.stcg_losses),
        ("LTCG gains",      b.ltcg_gains,   a.ltcg_gains),
        ("LTCG losses",     b.ltcg_losses,  a.ltcg_losses),
        ("Net STCG",        b.net_stcg,     a.net_stcg),
        ("Net LTCG",        b.net_ltcg,     a.net_ltcg),
        ("Taxable LTCG",    b.ltcg_taxable, a.ltcg_taxable),
        ("STCG tax",        b.stcg_tax,     a.stcg_tax),
        ("LTCG tax",        b.ltcg_tax,     a.ltcg_tax),
        ("Total tax",       b.total_tax,    a.total_tax),
    ]
    for r, (label, before, after) in enumerate(rows, 4):
        is_total = label == "Total tax"
        font = Font(name="Arial", size=10, bold=is_total)
        _style(ws.cell(r, 1, label), font=font)
        _style(ws.cell(r, 2, before), font=font, fmt=INR, align="right")
        _style(ws.cell(r, 3, after), font=font, fmt=INR, align="right")
        _style(ws.cell(r, 4, after - before), font=font, fmt=INR_NEG, align="right")

    for i, w in enumerate([18, 22, 22, 16], 1):
        ws.column_dimensions[get_column_letter(i)].width = w
    ws.freeze_panes = "A4"
