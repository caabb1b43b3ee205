"""
Tax Harvester - Main Entry Point
================================
Run this file to start the tax-loss harvesting CLI.
Usage: python main.py [holdings.csv] [--as-of YYYY-MM-DD]
"""

import argparse
import logging

from rich.logging import RichHandler

from harvest.cli import CLI
from harvest.config import Settings
from harvest.validation import parse_date


def main(argv=None):
    parser = argparse.ArgumentParser(description="Indian capital-gains tax and loss-harvesting planner")
    parser.add_argument("path", nargs="?", help="holdings file (.csv or .json)")
    parser.add_argument("--as-of", type=parse_date, default=None,
                        help="evaluation date, default today")
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s",
                        handlers=[RichHandler(show_path=False)])

    cli = CLI(path=args.path, as_of=args.as_of, rules=settings.to_rules())
    cli.run()


if __name__ == "__main__":
    main()
