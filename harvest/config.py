"""
harvest/config.py  —  Indian capital-gains tax rules

Rules implemented (equity, listed, STT paid):
  - STCG : 20% flat on net short-term gain (held under 12 months)
  - LTCG : 12.5% on net long-term gain above the annual exemption
  - LTCG exemption : ₹1,25,000 per financial year
  - Holding period : 365 days or more counts as long-term

The constants are the defaults. Any calculator accepts a TaxRules instance,
so a rule change is a config change, not a code change. Settings reads
overrides from the environment (HARVEST_*) or a .env file.
"""

from dataclasses import dataclass

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ── Indian tax constants ──────────────────────────────────────────────────────
STCG_TAX_RATE       = 0.20
LTCG_TAX_RATE       = 0.125
LTCG_EXEMPTION      = 125_000.0      # ₹1.25 lakh
LTCG_THRESHOLD_DAYS = 365            # 12 months


@dataclass(frozen=True)
class TaxRules:
    """Rates and thresholds used by every calculator in harvest.tax."""
    stcg_rate:           float = STCG_TAX_RATE
    ltcg_rate:           float = LTCG_TAX_RATE
    ltcg_exemption:      float = LTCG_EXEMPTION
    ltcg_threshold_days: int   = LTCG_THRESHOLD_DAYS

    def rate_for(self, long_term: bool) -> float:
        return self.ltcg_rate if long_term else self.stcg_rate


DEFAULT_RULES = TaxRules()


class Settings(BaseSettings):
    """Environment overrides, e.g. HARVEST_LTCG_EXEMPTION=100000."""

    model_config = SettingsConfigDict(env_prefix="HARVEST_", env_file=".env",
                                      extra="ignore")

    stcg_rate:           float = Field(STCG_TAX_RATE, ge=0, le=1)
    ltcg_rate:           float = Field(LTCG_TAX_RATE, ge=0, le=1)
    ltcg_exemption:      float = Field(LTCG_EXEMPTION, ge=0)
    ltcg_threshold_days: int   = Field(LTCG_THRESHOLD_DAYS, ge=0)
    log_level:           str   = "INFO"

    def to_rules(self) -> TaxRules:
        return TaxRules(
            stcg_rate=self.stcg_rate,
            ltcg_rate=self.ltcg_rate,
            ltcg_exemption=self.ltcg_exemption,
            ltcg_threshold_days=self.ltcg_threshold_days,
        )


def load_rules() -> TaxRules:
    """Build TaxRules from the environment, falling back to the defaults."""
    return Settings().to_rules()
