"""Merge GMGN holder documents into a ScreeningRecord.

Two GMGN endpoints feed the record:
- token_holder_stat: raw wallet-category counts (fresh, insider, bundler, ...)
- token_holders: ranked top-holder list with per-wallet tags

Both share the GMGN envelope {"code": 0, "msg": "success", "data": {...}}.
Callers must check is_success() first and skip rejected documents.
Merges run after parse_rugcheck_report() since ratios need total_holders.
"""

from typing import Any

from src.screening.models import ScreeningRecord, TopHolder
from src.utils.json_fields import as_float, as_int, as_str, as_str_list

BUNDLER_TAG = "bundler"

_COUNT_FIELDS = (
    "fresh_wallet_count",
    "insider_count",
    "bluechip_owner_count",
    "bundler_count",
    "dex_bot_count",
    "sniper_count",
    "dev_count",
)

_RATIO_FIELDS = (
    "insiders_pct",
    "bluechip_pct",
    "bundler_pct",
    "fresh_ratio",
    "bundled_ratio",
)


def is_success(doc: Any) -> bool:
    """GMGN success envelope: integer code 0 AND msg == "success"."""
    if not isinstance(doc, dict):
        return False
    return as_int(doc.get("code")) == 0 and doc.get("msg") == "success"


def merge_holder_stats(record: ScreeningRecord, doc: dict[str, Any]) -> None:
    """Copy holder-category counts and derive ratios against total_holders."""
    data = doc.get("data")
    if not isinstance(data, dict):
        data = {}

    for name in _COUNT_FIELDS:
        count = as_int(data.get(name))
        setattr(record, name, None if count is None else max(count, 0))
    for name in _RATIO_FIELDS:
        setattr(record, name, None)

    total = record.total_holders
    if total <= 0:
        return

    if record.insider_count is not None:
        record.insiders_pct = record.insider_count / total * 100
    if record.bluechip_owner_count is not None:
        record.bluechip_pct = record.bluechip_owner_count / total * 100
    if record.bundler_count is not None:
        record.bundler_pct = min(record.bundler_count / total * 100, 100.0)
        record.bundled_ratio = min(record.bundler_count / total, 1.0)
    if record.fresh_wallet_count is not None:
        record.fresh_ratio = record.fresh_wallet_count / total


def merge_top_holders(record: ScreeningRecord, doc: dict[str, Any]) -> None:
    """Replace top_holders from the document and derive bundler metrics.

    amount_percentage arrives as a fraction of supply and is stored x100.
    """
    data = doc.get("data")
    raw = data.get("list") if isinstance(data, dict) else None
    if not isinstance(raw, list):
        raw = []

    holders = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        fraction = as_float(item.get("amount_percentage")) or 0.0
        holders.append(TopHolder(
            address=as_str(item.get("address")) or "",
            percentage=fraction * 100,
            is_insider=item.get("insider") is True,
            maker_token_tags=as_str_list(item.get("maker_token_tags")),
            tags=as_str_list(item.get("tags")),
        ))
    record.top_holders = holders

    if not holders:
        # No data is not the same as a measured zero
        record.bundler_supply_pct = None
        record.bundler_holder_ratio = None
        return

    bundlers = [h for h in holders if is_bundler(h)]
    record.bundler_supply_pct = sum(h.percentage for h in bundlers)
    record.bundler_holder_ratio = len(bundlers) / len(holders)


def is_bundler(holder: TopHolder) -> bool:
    return any(BUNDLER_TAG in tag.lower() for tag in holder.all_tags())
