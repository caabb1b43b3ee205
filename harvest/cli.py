"""
harvest/cli.py
==============
The interactive command-line interface.

Holdings come from a CSV/JSON file or the built-in demo portfolio. Every
view recomputes from that list and the current evaluation date; nothing is
cached between menu choices.
"""

import logging
from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.prompt import Prompt

from harvest import display, exporter
from harvest.config import DEFAULT_RULES, TaxRules
from harvest.demo import demo_holdings
from harvest.loader import load_holdings
from harvest.models import Holding
from harvest.tax import (
    VIEWS, build_harvest_plan, compute_portfolio_summary, compute_tax_liability,
    enrich_all, filter_holdings,
)
from harvest.validation import HoldingValidationError, parse_date

console = Console()
logger  = logging.getLogger(__name__)


class CLI:
    """Main command-line interface class."""

    def __init__(self, path: Optional[str] = None, as_of: Optional[date] = None,
                 rules: TaxRules = DEFAULT_RULES):
        self.rules    = rules
        self.as_of    = as_of or date.today()
        self.holdings: List[Holding] = []
        self.source   = "none"
        if path:
            self._load(path)

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _load(self, path: str) -> None:
        try:
            self.holdings = load_holdings(path, as_of=self.as_of)
        except HoldingValidationError as e:
            console.print(f"[red]Could not load {path}:[/red]")
            for err in e.errors:
                console.print(f"  [red]•[/red] {err}")
            return
        except (OSError, ValueError) as e:
            console.print(f"[red]Could not read {path}: {e}[/red]")
            return
        self.source = path
        console.print(f"[green]✓ Loaded {len(self.holdings)} holdings from {path}[/green]")

    def _enriched(self):
        return enrich_all(self.holdings, self.as_of, self.rules)

    def _require_holdings(self) -> bool:
        if not self.holdings:
            console.print("[yellow]No holdings loaded. Press 1 to load a file or 2 for the demo.[/yellow]")
            return False
        return True

    # -----------------------------------------------------------------------
    # Menu actions
    # -----------------------------------------------------------------------

    def load_file(self):
        path = Prompt.ask("Path to holdings file (.csv or .json)")
        self._load(path.strip())

    def load_demo(self):
        self.holdings = demo_holdings()
        self.source   = "demo"
        console.print(f"[green]✓ Demo portfolio loaded ({len(self.holdings)} holdings)[/green]")

    def view_holdings(self):
        if not self._require_holdings():
            return
        view = Prompt.ask("Filter", choices=list(VIEWS), default="all")
        enriched = self._enriched()
        display.print_holdings(filter_holdings(enriched, view))
        display.print_portfolio_summary(compute_portfolio_summary(enriched))

    def view_tax_summary(self):
        if not self._require_holdings():
            return
        display.print_tax_summary(compute_tax_liability(self._enriched(), self.rules),
                                  self.rules)

    def view_harvest_plan(self):
        display.print_harvest_plan(build_harvest_plan(self.holdings, self.as_of, self.rules))

    def export_plan(self):
        if not self._require_holdings():
            return
        plan = build_harvest_plan(self.holdings, self.as_of, self.rules)
        console.print("\n  1. Export to Excel (.xlsx)")
        console.print("  2. Export to CSV")
        console.print("  3. Both")
        choice = Prompt.ask("Choose", choices=["1", "2", "3"])

        try:
            if choice in ("1", "3"):
                fname = exporter.export_plan_to_excel(plan)
                console.print(f"[green]✓ Excel saved: {fname}[/green]")
            if choice in ("2", "3"):
                fname = exporter.export_plan_to_csv(plan)
                console.print(f"[green]✓ CSV saved:   {fname}[/green]")
        except OSError as e:
            console.print(f"[red]Export failed: {e}[/red]")

    def change_date(self):
        raw = Prompt.ask("Evaluation date (YYYY-MM-DD)", default=self.as_of.isoformat())
        try:
            self.as_of = parse_date(raw)
        except HoldingValidationError as e:
            console.print(f"[red]{e}[/red]")
            return
        console.print(f"[green]✓ Evaluating as of {self.as_of}[/green]")

    # -----------------------------------------------------------------------
    # Main loop
    # -----------------------------------------------------------------------

    MENU = """
[grey39]┌─────────────────────────────────┐[/grey39]
[grey39]│[/grey39]  [steel_blue1]Tax Harvester[/steel_blue1]                   [grey39]│[/grey39]
[grey39]├─────────────────────────────────┤[/grey39]
[grey39]│[/grey39]  [white]1[/white]  [grey62]Load holdings file[/grey62]          [grey39]│[/grey39]
[grey39]│[/grey39]  [white]2[/white]  [grey62]Load demo portfolio[/grey62]         [grey39]│[/grey39]
[grey39]│[/grey39]  [white]3[/white]  [grey62]View holdings[/grey62]               [grey39]│[/grey39]
[grey39]│[/grey39]  [white]4[/white]  [grey62]Tax summary[/grey62]                 [grey39]│[/grey39]
[grey39]│[/grey39]  [white]5[/white]  [grey62]Harvest plan[/grey62]                [grey39]│[/grey39]
[grey39]│[/grey39]  [white]6[/white]  [grey62]Export plan (Excel / CSV)[/grey62]   [grey39]│[/grey39]
[grey39]│[/grey39]  [white]7[/white]  [grey62]Change evaluation date[/grey62]      [grey39]│[/grey39]
[grey39]│[/grey39]  [white]q[/white]  [grey62]Quit[/grey62]                        [grey39]│[/grey39]
[grey39]└─────────────────────────────────┘[/grey39]"""

    def run(self):
        actions = {
            "1": self.load_file,
            "2": self.load_demo,
            "3": self.view_holdings,
            "4": self.view_tax_summary,
            "5": self.view_harvest_plan,
            "6": self.export_plan,
            "7": self.change_date,
        }
        while True:
            console.print(self.MENU)
            console.print(f"[grey62]  Source: {self.source}   As of: {self.as_of}[/grey62]")
            choice = Prompt.ask("Choose", choices=list(actions) + ["q"], default="q")
            if choice == "q":
                console.print("[grey62]Bye.[/grey62]")
                break
            logger.debug("Menu choice %s", choice)
            actions[choice]()
