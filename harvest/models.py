"""
harvest/models.py  —  Pure dataclasses, no dependencies on other harvest modules.

Holding is the raw input. Everything else is derived on every call and is
frozen: nothing here is stored or carries identity between calls.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Union


class TaxCategory(str, Enum):
    SHORT_TERM = "STCG"
    LONG_TERM  = "LTCG"


@dataclass
class Holding:
    id:            str
    name:          str
    ticker:        str
    quantity:      int
    buy_price:     Union[float, Decimal] # ₹ per share
    current_price: Union[float, Decimal] # ₹ per share
    buy_date:      Union[date, str]      # date or ISO-8601 string


@dataclass(frozen=True)
class EnrichedHolding:
    id:                  str
    name:                str
    ticker:              str
    quantity:            int
    buy_price:           float
    current_price:       float
    buy_date:            date
    invested_value:      float
    current_value:       float
    gain_loss:           float           # signed
    gain_loss_pct:       float           # 0.0 when nothing was invested
    holding_period_days: int
    category:            TaxCategory
    threshold_days:      int = 365

    @property
    def is_long_term(self) -> bool:
        return self.category is TaxCategory.LONG_TERM

    @property
    def is_gain(self) -> bool:
        return self.gain_loss > 0

    @property
    def is_loss(self) -> bool:
        return self.gain_loss < 0

    @property
    def loss_amount(self) -> float:
        return -self.gain_loss if self.gain_loss < 0 else 0.0

    @property
    def days_to_long_term(self) -> int:
        """Days left before this holding qualifies as long-term (0 once it has)."""
        return max(0, self.threshold_days - self.holding_period_days)


@dataclass(frozen=True)
class TaxLiability:
    stcg_gains:   float      # all four buckets are positive magnitudes
    stcg_losses:  float
    ltcg_gains:   float
    ltcg_losses:  float
    net_stcg:     float      # max(0, gains - losses)
    net_ltcg:     float
    ltcg_taxable: float      # net_ltcg minus exemption (floor 0)
    stcg_tax:     float
    ltcg_tax:     float
    total_tax:    float

    @classmethod
    def zero(cls) -> "TaxLiability":
        return cls(0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class TaxScenario:
    label:     str
    liability: TaxLiability

    @property
    def taxable_stcg(self) -> float:
        return self.liability.net_stcg

    @property
    def taxable_ltcg(self) -> float:
        return self.liability.ltcg_taxable

    @property
    def stcg_tax(self) -> float:
        return self.liability.stcg_tax

    @property
    def ltcg_tax(self) -> float:
        return self.liability.ltcg_tax

    @property
    def total_tax(self) -> float:
        return self.liability.total_tax


@dataclass(frozen=True)
class HarvestingRecommendation:
    holding:          EnrichedHolding
    loss_amount:      float
    tax_saving:       float      # isolated estimate for this holding alone
    action:           str
    rebuy_suggestion: str


@dataclass(frozen=True)
class HarvestPlan:
    recommendations:      List[HarvestingRecommendation]
    total_loss_harvested: float
    total_tax_saving:     float
    before:               TaxScenario
    after:                TaxScenario
    evaluation_date:      date

    @property
    def is_empty(self) -> bool:
        return not self.recommendations


@dataclass(frozen=True)
class PortfolioSummary:
    total_invested:      float
    total_current:       float
    total_gain_loss:     float
    total_gain_loss_pct: float
    holding_count:       int
    by_category:         Dict[TaxCategory, int] = field(default_factory=dict)
