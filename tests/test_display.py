from datetime import date

import pytest
from rich.console import Console

from harvest import display
from harvest.demo import demo_holdings
from harvest.tax import (
    build_harvest_plan, compute_portfolio_summary, compute_tax_liability, enrich_all,
)

AS_OF = date(2026, 3, 31)


@pytest.fixture
def recorded(monkeypatch):
    console = Console(record=True, width=200, color_system=None)
    monkeypatch.setattr(display, "console", console)
    return console


def test_holdings_table_shows_category_and_days(recorded):
    enriched = enrich_all(demo_holdings(), AS_OF)
    display.print_holdings(enriched)
    display.print_portfolio_summary(compute_portfolio_summary(enriched))
    out = recorded.export_text()

    assert "INFY" in out and "ZOMATO" in out
    assert "LTCG" in out and "STCG" in out
    assert "to LT)" in out
    assert "Holdings" in out


def test_tax_summary_panel(recorded):
    display.print_tax_summary(compute_tax_liability(enrich_all(demo_holdings(), AS_OF)))
    out = recorded.export_text()
    assert "Current Tax Liability" in out
    assert "₹1,25,000" in out
    assert "20.0% / 12.5%" in out
    assert "Less: exemption" in out and "—" not in out


def test_harvest_plan_lists_recommendations(recorded):
    plan = build_harvest_plan(demo_holdings(), AS_OF)
    display.print_harvest_plan(plan)
    out = recorded.export_text()
    assert "PAYTM" in out
    assert "After Loss Harvesting" in out
    assert "₹88,000.00" in out


def test_empty_plan_message(recorded):
    display.print_harvest_plan(build_harvest_plan([], AS_OF))
    assert "Nothing to harvest" in recorded.export_text()
