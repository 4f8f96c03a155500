"""Screen one token: fetch sources, assemble the record, evaluate.

Fetches run concurrently; merges run afterwards in a fixed order because the
GMGN ratios depend on total_holders from the Rugcheck report.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

from loguru import logger

from src.parsers.gmgn.client import GmgnClient
from src.parsers.gmgn.exceptions import GmgnError
from src.parsers.rugcheck.client import RugcheckClient
from src.screening.evaluator import EvaluationResult, evaluate
from src.screening.holder_merge import is_success, merge_holder_stats, merge_top_holders
from src.screening.models import ScreeningRecord
from src.screening.report_parser import parse_rugcheck_report


@dataclass
class ScreeningOutcome:
    record: ScreeningRecord
    result: EvaluationResult
    report: dict[str, Any] | None = None  # raw Rugcheck report, for --dump-report


def build_record(
    mint: str,
    report: dict[str, Any] | None,
    holder_stat: dict[str, Any] | None,
    holders: dict[str, Any] | None,
) -> ScreeningRecord:
    """Assemble a ScreeningRecord from whichever documents are available."""
    record = parse_rugcheck_report(report, mint)

    if _accepted(holder_stat, "holder stats", mint):
        merge_holder_stats(record, holder_stat)
    if _accepted(holders, "top holders", mint):
        merge_top_holders(record, holders)

    return record


def _accepted(doc: Any, label: str, mint: str) -> bool:
    if doc is None:
        logger.debug(f"[SCREEN] No {label} for {mint}")
        return False
    if not is_success(doc):
        envelope = doc if isinstance(doc, dict) else {}
        logger.info(
            f"[SCREEN] {label.capitalize()} rejected for {mint}: "
            f"code={envelope.get('code')!r} msg={envelope.get('msg')!r}"
        )
        return False
    return True


async def screen_token(
    mint: str,
    *,
    rugcheck: RugcheckClient,
    gmgn: GmgnClient,
) -> ScreeningOutcome:
    """Fetch all three documents for a mint and return the verdict."""
    logger.info(f"[SCREEN] Starting rug pull check for {mint}")

    report, holder_stat, holders = await asyncio.gather(
        rugcheck.get_full_report(mint),
        _fetch_gmgn(gmgn.get_holder_stat(mint), "holder stats", mint),
        _fetch_gmgn(gmgn.get_token_holders(mint), "top holders", mint),
    )
    if report is None:
        logger.warning(f"[SCREEN] Rugcheck report unavailable for {mint}")

    record = build_record(mint, report, holder_stat, holders)
    result = evaluate(record)

    logger.info(
        f"[SCREEN] {mint[:12]} verdict={result.verdict.value} "
        f"holders={record.total_holders} reasons={len(result.reasons)}"
    )
    for reason in result.reasons:
        logger.debug(f"[SCREEN] {reason}")

    return ScreeningOutcome(record=record, result=result, report=report)


async def _fetch_gmgn(coro: Any, label: str, mint: str) -> dict[str, Any] | None:
    try:
        return await coro
    except GmgnError as e:
        logger.warning(f"[GMGN] {label} unavailable for {mint[:12]}: {e}")
        return None
