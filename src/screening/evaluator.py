"""Pass/Fail screening — hard gates first, then warning accumulation.

Pure function: no IO, total over any ScreeningRecord. Every check is guarded
by a presence test, so a record built from partial data still evaluates.

Hard gates are all evaluated (no short-circuit between them) so the caller
sees every reason at once. If any fires the token fails and warnings are
skipped. Otherwise warnings are counted and WARNING_THRESHOLD or more fails.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from src.screening.models import Risk, ScreeningRecord

# --- Hard gate thresholds ---
MAX_SCORE_NORMALISED = 20
MAX_TOP_HOLDER_PCT = 10.0
MIN_TOTAL_HOLDERS = 500
MAX_TOTAL_HOLDERS = 3000
MAX_INSIDERS_PCT = 5.0
MAX_BUNDLER_PCT = 30.0
MIN_BLUECHIP_PCT = 0.5
MAX_FRESH_RATIO = 0.4
MAX_BUNDLED_RATIO = 0.4

# Rugcheck risk names (substring match) that fail the token outright
CRITICAL_RISK_NAMES = (
    "Top holder concentration",
    "Creator has rugged",
    "Creator sold",
    "Honeypot",
)

# A healthy holder base shows at least one of these tags in its top wallets.
# Case-sensitive substring match across maker_token_tags and tags.
DESIRABLE_HOLDER_TAGS = ("bundler", "bluechip", "whale", "axiom")
TOO_CLEAN_WINDOW = 10

# --- Warning thresholds ---
WARN_SCORE_NORMALISED_MIN = 10
WARN_SCORE_NORMALISED_MAX = 20
MIN_LP_PROVIDERS = 5
MIN_FRESH_WALLET_COUNT = 100
MIN_BUNDLER_COUNT = 100
WARNING_THRESHOLD = 2


class Verdict(StrEnum):
    PASS = "pass"
    FAIL = "fail"


@dataclass
class EvaluationResult:
    """Verdict plus reasons in evaluation order."""

    verdict: Verdict
    reasons: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.verdict is Verdict.PASS


def evaluate(record: ScreeningRecord) -> EvaluationResult:
    """Classify a fully merged record as Pass or Fail."""
    hard = _hard_fail_reasons(record)
    if hard:
        return EvaluationResult(Verdict.FAIL, hard)

    warnings = _warning_reasons(record)
    if len(warnings) >= WARNING_THRESHOLD:
        summary = f"FAIL: {len(warnings)} warnings (threshold {WARNING_THRESHOLD})"
        return EvaluationResult(Verdict.FAIL, [summary, *warnings])

    return EvaluationResult(Verdict.PASS, warnings)


def is_critical_risk(risk: Risk) -> bool:
    name = risk.name or ""
    return any(critical in name for critical in CRITICAL_RISK_NAMES)


def is_too_clean(record: ScreeningRecord) -> bool:
    """True when no top wallet carries any diversity-indicating tag.

    Only the first TOO_CLEAN_WINDOW holders are inspected; a shorter list is
    inspected in full. An empty list means no data, not "clean".
    """
    if not record.top_holders:
        return False
    for holder in record.top_holders[:TOO_CLEAN_WINDOW]:
        for tag in holder.all_tags():
            if any(wanted in tag for wanted in DESIRABLE_HOLDER_TAGS):
                return False
    return True


def _hard_fail_reasons(record: ScreeningRecord) -> list[str]:
    reasons: list[str] = []

    score = record.score_normalised
    if score is not None and score > MAX_SCORE_NORMALISED:
        reasons.append(f"HARD: score_normalised {score} > {MAX_SCORE_NORMALISED}")

    top_pct = record.top_holder_pct
    if top_pct is not None and top_pct > MAX_TOP_HOLDER_PCT:
        reasons.append(
            f"HARD: top_holder_pct {top_pct:.2f}% > {MAX_TOP_HOLDER_PCT}% (single wallet concentration)"
        )

    holders = record.total_holders
    if holders < MIN_TOTAL_HOLDERS:
        reasons.append(
            f"HARD: total_holders {holders} < {MIN_TOTAL_HOLDERS} (too few for new coin)"
        )
    elif holders > MAX_TOTAL_HOLDERS:
        reasons.append(
            f"HARD: total_holders {holders} > {MAX_TOTAL_HOLDERS} (too many for new coin)"
        )

    insiders = record.insiders_pct
    if insiders is not None and insiders > MAX_INSIDERS_PCT:
        reasons.append(f"HARD: insiders_pct {insiders:.2f}% > {MAX_INSIDERS_PCT}%")

    bundler_pct = record.effective_bundler_pct
    if bundler_pct is not None and bundler_pct > MAX_BUNDLER_PCT:
        source = "top holders" if record.bundler_supply_pct is not None else "holder stats"
        reasons.append(
            f"HARD: bundler_pct {bundler_pct:.2f}% > {MAX_BUNDLER_PCT}% (from {source})"
        )

    bluechip = record.bluechip_pct
    if bluechip is not None and bluechip < MIN_BLUECHIP_PCT:
        reasons.append(f"HARD: bluechip_pct {bluechip:.2f}% < {MIN_BLUECHIP_PCT}%")

    fresh = record.fresh_ratio
    if fresh is not None and fresh > MAX_FRESH_RATIO:
        reasons.append(f"HARD: fresh_ratio {fresh:.2f} > {MAX_FRESH_RATIO}")

    bundled = record.effective_bundled_ratio
    if bundled is not None and bundled > MAX_BUNDLED_RATIO:
        source = "top holders" if record.bundler_holder_ratio is not None else "holder stats"
        reasons.append(
            f"HARD: bundled_ratio {bundled:.2f} > {MAX_BUNDLED_RATIO} (from {source})"
        )

    for risk in record.risks:
        if is_critical_risk(risk):
            reasons.append(f"HARD: critical risk '{risk.name}'")

    if record.rugged is True:
        reasons.append("HARD: token flagged as rugged")

    if is_too_clean(record):
        wanted = "/".join(DESIRABLE_HOLDER_TAGS)
        reasons.append(
            f"HARD: top {TOO_CLEAN_WINDOW} holders too clean (no {wanted} tags)"
        )

    return reasons


def _warning_reasons(record: ScreeningRecord) -> list[str]:
    reasons: list[str] = []

    score = record.score_normalised
    if score is not None and WARN_SCORE_NORMALISED_MIN <= score <= WARN_SCORE_NORMALISED_MAX:
        reasons.append(
            f"WARN: score_normalised {score} in "
            f"[{WARN_SCORE_NORMALISED_MIN}, {WARN_SCORE_NORMALISED_MAX}]"
        )

    if record.total_lp_providers < MIN_LP_PROVIDERS:
        reasons.append(
            f"WARN: lp_providers {record.total_lp_providers} < {MIN_LP_PROVIDERS}"
        )

    for risk in record.risks:
        if not is_critical_risk(risk):
            level = risk.level or "unknown"
            reasons.append(f"WARN: risk '{risk.name or 'unnamed'}' ({level})")

    fresh = record.fresh_wallet_count
    if fresh is not None and fresh < MIN_FRESH_WALLET_COUNT:
        reasons.append(f"WARN: fresh_wallet_count {fresh} < {MIN_FRESH_WALLET_COUNT}")

    bundlers = record.bundler_count
    if bundlers is not None and bundlers < MIN_BUNDLER_COUNT:
        reasons.append(f"WARN: bundler_count {bundlers} < {MIN_BUNDLER_COUNT}")

    return reasons
