"""
harvest/tax.py  —  Indian capital-gains tax and loss-harvesting calculations

Rules implemented (rates and thresholds live in harvest.config.TaxRules):
  - Holding period   : whole calendar days since the buy date; 365+ is long-term
  - STCG             : 20% flat on net short-term gain
  - LTCG             : 12.5% on net long-term gain above the ₹1.25 lakh exemption
  - Loss offsetting  : ST losses may reduce LT gains, LT losses may NOT reduce
                       ST gains. Only applied in the harvested scenario.

Two different "savings" are computed on purpose:
  - generate_recommendations : per holding, loss × its own rate, no interaction
  - build_harvest_plan       : portfolio-wide, before tax − after tax with the
                               offset rules above

Everything here is pure: the evaluation date is always passed in, nothing
reads the clock, nothing is mutated. All amounts in INR.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Sequence, Union

from harvest.config import DEFAULT_RULES, TaxRules
from harvest.models import (
    EnrichedHolding, HarvestingRecommendation, HarvestPlan, Holding,
    PortfolioSummary, TaxCategory, TaxLiability, TaxScenario,
)
from harvest.validation import ensure_valid_amounts, parse_date

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]

BEFORE_LABEL     = "Current Tax Liability"
AFTER_LABEL      = "After Loss Harvesting"
REBUY_SUGGESTION = "Rebuy tomorrow at market price to maintain position"

VIEWS = ("all", "gainers", "losers", "stcg", "ltcg")


class HarvestComputationError(RuntimeError):
    """The harvested scenario came out more expensive than doing nothing."""


# ── Holding metrics ───────────────────────────────────────────────────────────

def tax_category(holding_days: int, rules: TaxRules = DEFAULT_RULES) -> TaxCategory:
    if holding_days >= rules.ltcg_threshold_days:
        return TaxCategory.LONG_TERM
    return TaxCategory.SHORT_TERM


def holding_period_days(buy_date: DateLike, evaluation_date: DateLike) -> int:
    """Whole days held. A buy date after the evaluation date counts as 0."""
    return max(0, (parse_date(evaluation_date) - parse_date(buy_date)).days)


def compute_metrics(holding: Holding,
                    evaluation_date: DateLike,
                    rules: TaxRules = DEFAULT_RULES) -> EnrichedHolding:
    """
    Enrich one holding with value, gain/loss, holding period and tax category
    as of evaluation_date.
    Raises HoldingValidationError for a non-positive or fractional quantity,
    a negative price or an unparseable date.
    """
    ensure_valid_amounts(holding)
    buy_date = parse_date(holding.buy_date)
    days     = holding_period_days(buy_date, evaluation_date)

    quantity       = int(holding.quantity)
    buy_price      = float(holding.buy_price)
    current_price  = float(holding.current_price)
    invested_value = buy_price * quantity
    current_value  = current_price * quantity
    gain_loss      = current_value - invested_value
    # Nothing invested (bonus shares): percentage is undefined, report 0
    gain_loss_pct  = gain_loss / invested_value * 100 if invested_value else 0.0

    return EnrichedHolding(
        id=holding.id,
        name=holding.name,
        ticker=holding.ticker,
        quantity=quantity,
        buy_price=buy_price,
        current_price=current_price,
        buy_date=buy_date,
        invested_value=invested_value,
        current_value=current_value,
        gain_loss=gain_loss,
        gain_loss_pct=gain_loss_pct,
        holding_period_days=days,
        category=tax_category(days, rules),
        threshold_days=rules.ltcg_threshold_days,
    )


def enrich_all(holdings: Sequence[Holding],
               evaluation_date: DateLike,
               rules: TaxRules = DEFAULT_RULES) -> List[EnrichedHolding]:
    as_of = parse_date(evaluation_date)
    return [compute_metrics(h, as_of, rules) for h in holdings]


# ── Gain / loss buckets ───────────────────────────────────────────────────────

@dataclass
class _Buckets:
    stcg_gains:  float = 0.0
    stcg_losses: float = 0.0
    ltcg_gains:  float = 0.0
    ltcg_losses: float = 0.0

    def add(self, holding: EnrichedHolding) -> None:
        gain = holding.gain_loss
        if holding.category is TaxCategory.SHORT_TERM:
            if gain > 0:
                self.stcg_gains += gain
            else:
                self.stcg_losses += abs(gain)
        else:
            if gain > 0:
                self.ltcg_gains += gain
            else:
                self.ltcg_losses += abs(gain)


def _bucket(enriched: Sequence[EnrichedHolding]) -> _Buckets:
    buckets = _Buckets()
    for h in enriched:
        buckets.add(h)
    return buckets


def _liability(buckets: _Buckets, net_stcg: float, net_ltcg: float,
               rules: TaxRules) -> TaxLiability:
    ltcg_taxable = max(0.0, net_ltcg - rules.ltcg_exemption)
    stcg_tax     = net_stcg * rules.stcg_rate
    ltcg_tax     = ltcg_taxable * rules.ltcg_rate
    return TaxLiability(
        stcg_gains=buckets.stcg_gains,
        stcg_losses=buckets.stcg_losses,
        ltcg_gains=buckets.ltcg_gains,
        ltcg_losses=buckets.ltcg_losses,
        net_stcg=net_stcg,
        net_ltcg=net_ltcg,
        ltcg_taxable=ltcg_taxable,
        stcg_tax=stcg_tax,
        ltcg_tax=ltcg_tax,
        total_tax=stcg_tax + ltcg_tax,
    )


# ── Tax liability ─────────────────────────────────────────────────────────────

def compute_tax_liability(enriched: Sequence[EnrichedHolding],
                          rules: TaxRules = DEFAULT_RULES) -> TaxLiability:
    """
    Tax on the portfolio as it stands. Gains and losses are netted within each
    category only; there is no cross-category offset here.
    """
    if not enriched:
        return TaxLiability.zero()
    b = _bucket(enriched)
    net_stcg = max(0.0, b.stcg_gains - b.stcg_losses)
    net_ltcg = max(0.0, b.ltcg_gains - b.ltcg_losses)
    return _liability(b, net_stcg, net_ltcg, rules)


def compute_harvested_liability(enriched: Sequence[EnrichedHolding],
                                rules: TaxRules = DEFAULT_RULES) -> TaxLiability:
    """
    Tax once every loss-making holding has been sold and its loss booked.

    Offset order:
      1. ST losses against ST gains; what is left over is excess ST loss
      2. LT losses against LT gains (never against ST gains)
      3. excess ST loss against the remaining LT gain
    """
    if not enriched:
        return TaxLiability.zero()
    b = _bucket(enriched)

    excess_st_loss = 0.0
    if b.stcg_losses > b.stcg_gains:
        excess_st_loss = b.stcg_losses - b.stcg_gains
        net_stcg = 0.0
    else:
        net_stcg = b.stcg_gains - b.stcg_losses

    net_ltcg = max(0.0, b.ltcg_gains - b.ltcg_losses)
    if excess_st_loss > 0 and net_ltcg > 0:
        net_ltcg = max(0.0, net_ltcg - excess_st_loss)

    return _liability(b, net_stcg, net_ltcg, rules)


# ── Harvest recommendations ──────────────────────────────────────────────────

def _recommend(holding: EnrichedHolding, rules: TaxRules) -> HarvestingRecommendation:
    loss = holding.loss_amount
    return HarvestingRecommendation(
        holding=holding,
        loss_amount=loss,
        tax_saving=loss * rules.rate_for(holding.is_long_term),
        action=f"Sell {holding.quantity} shares at ₹{holding.current_price:.2f}",
        rebuy_suggestion=REBUY_SUGGESTION,
    )


def generate_recommendations(enriched: Sequence[EnrichedHolding],
                             rules: TaxRules = DEFAULT_RULES
                             ) -> List[HarvestingRecommendation]:
    """Loss-making holdings, highest isolated tax saving first (ties keep input order)."""
    recs = [_recommend(h, rules) for h in enriched if h.gain_loss < 0]
    return sorted(recs, key=lambda r: r.tax_saving, reverse=True)


# ── Harvest plan ──────────────────────────────────────────────────────────────

def build_harvest_plan(holdings: Sequence[Holding],
                       evaluation_date: DateLike,
                       rules: TaxRules = DEFAULT_RULES) -> HarvestPlan:
    """Before/after tax picture if every recommended holding is sold today."""
    as_of    = parse_date(evaluation_date)
    enriched = enrich_all(holdings, as_of, rules)
    recs     = generate_recommendations(enriched, rules)

    before = TaxScenario(BEFORE_LABEL, compute_tax_liability(enriched, rules))
    after  = TaxScenario(AFTER_LABEL, compute_harvested_liability(enriched, rules))

    total_loss   = sum(r.loss_amount for r in recs)
    total_saving = before.total_tax - after.total_tax
    if total_saving < 0:
        raise HarvestComputationError(
            f"Harvesting raised tax from {before.total_tax:.2f} to "
            f"{after.total_tax:.2f} as of {as_of}")

    logger.debug("Harvest plan as of %s: %d holdings, %d to sell, saving %.2f",
                 as_of, len(enriched), len(recs), total_saving)

    return HarvestPlan(
        recommendations=recs,
        total_loss_harvested=total_loss,
        total_tax_saving=total_saving,
        before=before,
        after=after,
        evaluation_date=as_of,
    )


# ── Portfolio views ───────────────────────────────────────────────────────────

def compute_portfolio_summary(enriched: Sequence[EnrichedHolding]) -> PortfolioSummary:
    total_invested = sum(h.invested_value for h in enriched)
    total_current  = sum(h.current_value for h in enriched)
    total_gain     = total_current - total_invested
    by_category = {c: sum(1 for h in enriched if h.category is c) for c in TaxCategory}
    return PortfolioSummary(
        total_invested=total_invested,
        total_current=total_current,
        total_gain_loss=total_gain,
        total_gain_loss_pct=(total_gain / total_invested * 100) if total_invested else 0.0,
        holding_count=len(enriched),
        by_category=by_category,
    )


def filter_holdings(enriched: Sequence[EnrichedHolding], view: str = "all"
                    ) -> List[EnrichedHolding]:
    """Same filters as the portfolio table: all, gainers, losers, stcg, ltcg."""
    view = view.lower()
    if view == "all":
        return list(enriched)
    if view == "gainers":
        return [h for h in enriched if h.gain_loss > 0]
    if view == "losers":
        return [h for h in enriched if h.gain_loss < 0]
    if view == "stcg":
        return [h for h in enriched if h.category is TaxCategory.SHORT_TERM]
    if view == "ltcg":
        return [h for h in enriched if h.category is TaxCategory.LONG_TERM]
    raise ValueError(f"Unknown view '{view}'. Choose one of: {', '.join(VIEWS)}.")
