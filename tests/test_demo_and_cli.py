from datetime import date

import pytest

from harvest import cli as cli_module
from harvest.cli import CLI
from harvest.demo import demo_holdings
from harvest.tax import build_harvest_plan

AS_OF = date(2026, 3, 31)


def test_demo_portfolio_losers():
    plan = build_harvest_plan(demo_holdings(), AS_OF)

    assert len(demo_holdings()) == 9
    assert plan.total_loss_harvested == 88_000
    assert [r.holding.ticker for r in plan.recommendations] == ["PAYTM", "WIPRO", "ZOMATO", "TECHM"]
    assert plan.after.total_tax <= plan.before.total_tax


def test_demo_holdings_are_fresh_copies():
    first = demo_holdings()
    first[0].quantity = 1
    assert demo_holdings()[0].quantity == 100


@pytest.fixture
def answers(monkeypatch):
    """Feed scripted answers to every Prompt.ask in the CLI."""
    queue = []

    def fake_ask(*args, **kwargs):
        return queue.pop(0)

    monkeypatch.setattr(cli_module.Prompt, "ask", fake_ask)
    return queue


def test_cli_loads_file_and_changes_date(tmp_path, answers):
    path = tmp_path / "h.csv"
    path.write_text("name,ticker,quantity,buy_price,current_price,buy_date\n"
                    "Wipro,WIPRO,10,450,385,2025-10-15\n", encoding="utf-8")

    app = CLI(path=str(path), as_of=AS_OF)
    assert app.source == str(path)
    assert len(app.holdings) == 1

    answers.extend(["2026-12-31"])
    app.change_date()
    assert app.as_of == date(2026, 12, 31)

    answers.extend(["not-a-date"])
    app.change_date()
    assert app.as_of == date(2026, 12, 31)


def test_cli_bad_file_keeps_empty_portfolio(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("name,ticker,quantity,buy_price,current_price,buy_date\n"
                    "Wipro,WIPRO,0,450,385,2025-10-15\n", encoding="utf-8")
    app = CLI(path=str(path), as_of=AS_OF)
    assert app.holdings == []
    assert app.source == "none"


def test_cli_menu_loop_runs_views_and_quits(answers, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    answers.extend(["2", "3", "losers", "4", "5", "6", "2", "q"])

    CLI(as_of=AS_OF).run()

    assert answers == []
    assert len(list(tmp_path.glob("harvest_plan_*.csv"))) == 1
