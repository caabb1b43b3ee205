"""
harvest/display.py
==================
Renders holdings, tax liability and the harvest plan in the terminal using
the `rich` library.

Display logic lives here, not in harvest.tax: every function takes values
already computed by the calculators and only formats them.
"""

from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich import box
from rich.panel import Panel

from harvest.config import DEFAULT_RULES, TaxRules
from harvest.formatters import format_currency, format_large_number, format_with_sign
from harvest.models import (
    EnrichedHolding, HarvestPlan, PortfolioSummary, TaxCategory, TaxLiability,
)


console = Console()

# ── Palette ─────────────────────────────────────────────────────────────────
GAIN   = "green"
LOSS   = "red"
MUTED  = "grey62"
ACCENT = "steel_blue1"
HEAD   = "bold white"


# ── Formatters ───────────────────────────────────────────────────────────────

def _colour(value: float, text: str) -> str:
    if value > 0:  return f"[{GAIN}]{text}[/{GAIN}]"
    if value < 0:  return f"[{LOSS}]{text}[/{LOSS}]"
    return f"[{MUTED}]{text}[/{MUTED}]"

def _pct(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"

def _arrow(value: float) -> str:
    if value > 0:  return f"[{GAIN}]▲[/{GAIN}]"
    if value < 0:  return f"[{LOSS}]▼[/{LOSS}]"
    return f"[{MUTED}]─[/{MUTED}]"

def _category(h: EnrichedHolding) -> str:
    if h.category is TaxCategory.LONG_TERM:
        return f"[{GAIN}]LTCG[/{GAIN}]"
    return f"[{LOSS}]STCG[/{LOSS}]"

def _table() -> Table:
    return Table(
        box=box.SIMPLE,
        show_header=True,
        header_style=f"bold {ACCENT}",
        show_edge=False,
        pad_edge=True,
    )


# ── Holdings ─────────────────────────────────────────────────────────────────

def print_holdings(holdings: Sequence[EnrichedHolding]) -> None:
    if not holdings:
        console.print(f"\n  [{MUTED}]No holdings to show.[/{MUTED}]\n")
        return

    table = _table()
    table.row_styles = ["", "on grey7"]
    table.add_column("",          width=2)
    table.add_column("Ticker",    style=HEAD, min_width=8)
    table.add_column("Name",      style=MUTED, min_width=16)
    table.add_column("Qty",       justify="right")
    table.add_column("Buy",       justify="right", style=MUTED)
    table.add_column("Price",     justify="right")
    table.add_column("Value",     justify="right", style=HEAD)
    table.add_column("P&L",       justify="right", min_width=13)
    table.add_column("P&L %",     justify="right")
    table.add_column("Held",      justify="right", style=MUTED)
    table.add_column("Tax",       justify="center")

    for h in holdings:
        held = f"{h.holding_period_days} days"
        if h.days_to_long_term:
            held += f" [{MUTED}]({h.days_to_long_term} to LT)[/{MUTED}]"
        table.add_row(
            _arrow(h.gain_loss),
            h.ticker,
            h.name,
            f"{h.quantity:,}",
            format_currency(h.buy_price),
            format_currency(h.current_price),
            format_currency(h.current_value),
            _colour(h.gain_loss, format_with_sign(h.gain_loss)),
            _colour(h.gain_loss_pct, _pct(h.gain_loss_pct)),
            held,
            _category(h),
        )

    console.print()
    console.print(table)


def print_portfolio_summary(summary: PortfolioSummary) -> None:
    parts = [
        f"[{MUTED}]Invested[/{MUTED}]  [white]{format_large_number(summary.total_invested)}[/white]",
        f"[{MUTED}]Value[/{MUTED}]  [bold white]{format_large_number(summary.total_current)}[/bold white]",
        f"[{MUTED}]P&L[/{MUTED}]  {_colour(summary.total_gain_loss, format_with_sign(summary.total_gain_loss))}"
        f"  {_colour(summary.total_gain_loss_pct, _pct(summary.total_gain_loss_pct))}",
        f"[{MUTED}]Holdings[/{MUTED}]  [white]{summary.holding_count}[/white]",
    ]
    console.print("  " + "     ".join(parts) + "\n")


# ── Tax summary ──────────────────────────────────────────────────────────────

def print_tax_summary(liability: TaxLiability, rules: TaxRules = DEFAULT_RULES) -> None:
    table = _table()
    table.add_column("",      min_width=22, style=MUTED)
    table.add_column("STCG",  justify="right", min_width=16)
    table.add_column("LTCG",  justify="right", min_width=16)

    table.add_row("Total gains",
                  f"[{GAIN}]+{format_currency(liability.stcg_gains)}[/{GAIN}]",
                  f"[{GAIN}]+{format_currency(liability.ltcg_gains)}[/{GAIN}]")
    table.add_row("Total losses",
                  f"[{LOSS}]-{format_currency(liability.stcg_losses)}[/{LOSS}]",
                  f"[{LOSS}]-{format_currency(liability.ltcg_losses)}[/{LOSS}]")
    table.add_row("Net gain",
                  format_currency(liability.net_stcg),
                  format_currency(liability.net_ltcg))
    table.add_row("Less: exemption", "-",
                  format_currency(rules.ltcg_exemption, show_decimals=False))
    table.add_row("Taxable",
                  format_currency(liability.net_stcg),
                  format_currency(liability.ltcg_taxable))
    table.add_row(f"Tax @ {rules.stcg_rate:.1%} / {rules.ltcg_rate:.1%}",
                  f"[{LOSS}]{format_currency(liability.stcg_tax)}[/{LOSS}]",
                  f"[{LOSS}]{format_currency(liability.ltcg_tax)}[/{LOSS}]")

    total = f"[bold white]{format_currency(liability.total_tax, show_decimals=False)}[/bold white]"
    console.print(Panel(table, title=f"Current Tax Liability  {total}",
                        border_style=ACCENT, padding=(1, 2)))


# ── Harvest plan ─────────────────────────────────────────────────────────────

def print_harvest_plan(plan: HarvestPlan) -> None:
    console.print()
    if plan.is_empty:
        console.print(f"  [{MUTED}]No holdings are at a loss as of "
                      f"{plan.evaluation_date}. Nothing to harvest.[/{MUTED}]\n")
        return

    table = _table()
    table.add_column("#",           justify="right", style=MUTED)
    table.add_column("Ticker",      style=HEAD)
    table.add_column("Tax",         justify="center")
    table.add_column("Loss",        justify="right")
    table.add_column("Tax saving",  justify="right")
    table.add_column("Action",      style="white")
    table.add_column("Then",        style=MUTED)

    for i, rec in enumerate(plan.recommendations, 1):
        table.add_row(
            str(i),
            rec.holding.ticker,
            _category(rec.holding),
            f"[{LOSS}]{format_currency(rec.loss_amount)}[/{LOSS}]",
            f"[{GAIN}]{format_currency(rec.tax_saving)}[/{GAIN}]",
            rec.action,
            rec.rebuy_suggestion,
        )
    console.print(table)

    scenarios = _table()
    scenarios.add_column("",              style=MUTED, min_width=18)
    scenarios.add_column(plan.before.label, justify="right")
    scenarios.add_column(plan.after.label,  justify="right")
    for label, attr in [("Taxable STCG", "taxable_stcg"), ("Taxable LTCG", "taxable_ltcg"),
                        ("STCG tax", "stcg_tax"), ("LTCG tax", "ltcg_tax"),
                        ("Total tax", "total_tax")]:
        scenarios.add_row(label,
                          format_currency(getattr(plan.before, attr)),
                          format_currency(getattr(plan.after, attr)))

    saving = f"[{GAIN}]{format_currency(plan.total_tax_saving)}[/{GAIN}]"
    console.print(Panel(
        scenarios,
        title=f"Harvest {format_currency(plan.total_loss_harvested)} of losses → save {saving}",
        subtitle=f"[{MUTED}]as of {plan.evaluation_date}[/{MUTED}]",
        border_style=ACCENT, padding=(1, 2),
    ))
