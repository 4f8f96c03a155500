"""Screening data model — one record per token, assembled from several sources.

Rugcheck report fills the base fields, GMGN holder stats and GMGN top holders
are merged on top. Every source-dependent field is optional: a missing source
simply leaves its fields as None.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel


class Risk(BaseModel):
    """Single risk flagged in a Rugcheck report."""

    name: str | None = None
    level: str | None = None  # "warn", "danger", "info"
    description: str | None = None
    score: int | None = None
    value: str | None = None


class TopHolder(BaseModel):
    """Wallet from the GMGN ranked holder list."""

    address: str = ""
    percentage: float = 0.0  # 0-100 of total supply
    is_insider: bool = False
    maker_token_tags: list[str] = []
    tags: list[str] = []

    def all_tags(self) -> list[str]:
        return [*self.maker_token_tags, *self.tags]


@dataclass
class ScreeningRecord:
    """Everything the evaluator needs to know about a token."""

    mint: str

    # Rugcheck report
    score: int | None = None
    score_normalised: int | None = None
    top_holder_pct: float | None = None
    total_holders: int = 0
    creator: str | None = None
    creator_balance: int | None = None
    risks: list[Risk] = field(default_factory=list)
    lp_locked_pct: float | None = None
    total_lp_providers: int = 0
    graph_insiders_detected: int = 0
    rugged: bool | None = None
    price: float | None = None
    market_cap: float | None = None
    mcap_per_holder: float | None = None

    # GMGN holder stats (raw counts)
    fresh_wallet_count: int | None = None
    insider_count: int | None = None
    bluechip_owner_count: int | None = None
    bundler_count: int | None = None
    dex_bot_count: int | None = None
    sniper_count: int | None = None
    dev_count: int | None = None

    # Derived from counts (only when total_holders > 0)
    insiders_pct: float | None = None
    bluechip_pct: float | None = None
    bundler_pct: float | None = None  # capped at 100
    fresh_ratio: float | None = None
    bundled_ratio: float | None = None  # capped at 1.0

    # Derived from top holders; evaluator prefers these over the count-based
    # pair since GMGN counts can exceed total_holders
    bundler_supply_pct: float | None = None
    bundler_holder_ratio: float | None = None

    top_holders: list[TopHolder] = field(default_factory=list)

    @property
    def effective_bundler_pct(self) -> float | None:
        if self.bundler_supply_pct is not None:
            return self.bundler_supply_pct
        return self.bundler_pct

    @property
    def effective_bundled_ratio(self) -> float | None:
        if self.bundler_holder_ratio is not None:
            return self.bundler_holder_ratio
        return self.bundled_ratio
