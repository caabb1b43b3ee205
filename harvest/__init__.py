"""
harvest  —  Indian capital-gains tax and tax-loss harvesting for a stock portfolio.
"""

from harvest.config import DEFAULT_RULES, TaxRules, load_rules
from harvest.models import (
    EnrichedHolding, HarvestingRecommendation, HarvestPlan, Holding,
    PortfolioSummary, TaxCategory, TaxLiability, TaxScenario,
)
from harvest.tax import (
    HarvestComputationError, build_harvest_plan, compute_harvested_liability,
    compute_metrics, compute_portfolio_summary, compute_tax_liability,
    enrich_all, filter_holdings, generate_recommendations,
)
from harvest.validation import HoldingValidationError

__version__ = "1.0.0"
