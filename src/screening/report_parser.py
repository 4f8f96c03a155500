"""Rugcheck full report → ScreeningRecord.

Best-effort extraction: any path that is missing or has an unexpected type
leaves the corresponding field unset. Never raises.
"""

from typing import Any

from src.screening.models import Risk, ScreeningRecord
from src.utils.json_fields import as_float, as_int, as_str

DEFAULT_DECIMALS = 6
MAX_DECIMALS = 255


def parse_rugcheck_report(data: Any, mint: str) -> ScreeningRecord:
    """Build a ScreeningRecord from the /tokens/{mint}/report response."""
    record = ScreeningRecord(mint=mint)
    if not isinstance(data, dict):
        return record

    record.score = as_int(data.get("score"))
    record.score_normalised = as_int(data.get("score_normalised"))

    top_holders = data.get("topHolders")
    if isinstance(top_holders, list) and top_holders and isinstance(top_holders[0], dict):
        record.top_holder_pct = as_float(top_holders[0].get("pct"))

    record.total_holders = max(as_int(data.get("totalHolders")) or 0, 0)
    record.creator = as_str(data.get("creator"))
    record.creator_balance = as_int(data.get("creatorBalance"))
    record.risks = _parse_risks(data.get("risks"))

    markets = data.get("markets")
    if isinstance(markets, list) and markets and isinstance(markets[0], dict):
        lp = markets[0].get("lp")
        if isinstance(lp, dict):
            record.lp_locked_pct = as_float(lp.get("lpLockedPct"))

    record.total_lp_providers = max(as_int(data.get("totalLPProviders")) or 0, 0)
    record.graph_insiders_detected = max(as_int(data.get("graphInsidersDetected")) or 0, 0)

    rugged = data.get("rugged")
    record.rugged = rugged if isinstance(rugged, bool) else None

    record.price = as_float(data.get("price"))

    token = data.get("token")
    if not isinstance(token, dict):
        token = {}
    supply = as_float(token.get("supply"))
    decimals = as_int(token.get("decimals"))
    if decimals is None:
        decimals = DEFAULT_DECIMALS

    # SPL mint decimals are a u8; anything else is garbage, not a scale
    if record.price is not None and supply is not None and 0 <= decimals <= MAX_DECIMALS:
        circulating = supply / (10 ** decimals)
        record.market_cap = record.price * circulating
        record.mcap_per_holder = record.market_cap / max(record.total_holders, 1)

    return record


def _parse_risks(raw: Any) -> list[Risk]:
    if not isinstance(raw, list):
        return []
    risks = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        risks.append(Risk(
            name=as_str(item.get("name")),
            level=as_str(item.get("level")),
            description=as_str(item.get("description")),
            score=as_int(item.get("score")),
            value=as_str(item.get("value")),
        ))
    return risks
