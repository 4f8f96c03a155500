"""Render screening results for the terminal or as JSON-ready dicts."""

from typing import Any

from src.screening.evaluator import EvaluationResult
from src.screening.models import ScreeningRecord


def format_result(record: ScreeningRecord, result: EvaluationResult) -> str:
    """Plain-text summary: verdict, key metrics, reasons."""
    verdict = "PASS" if result.passed else "FAIL"
    lines = [
        f"Token:    {record.mint}",
        f"Verdict:  {verdict}",
        "",
        f"Holders:        {record.total_holders:,}",
        f"Score (norm):   {_fmt(record.score_normalised)}",
        f"Top holder:     {_fmt_pct(record.top_holder_pct)}",
        f"Market cap:     {_fmt_usd(record.market_cap)}",
        f"MCap / holder:  {_fmt_usd(record.mcap_per_holder)}",
        f"LP locked:      {_fmt_pct(record.lp_locked_pct)}",
        f"LP providers:   {record.total_lp_providers}",
        f"Insiders:       {_fmt_pct(record.insiders_pct)}",
        f"Bundler supply: {_fmt_pct(record.effective_bundler_pct)}",
        f"Bundled ratio:  {_fmt(record.effective_bundled_ratio, '.2f')}",
        f"Bluechip:       {_fmt_pct(record.bluechip_pct)}",
        f"Fresh ratio:    {_fmt(record.fresh_ratio, '.2f')}",
    ]

    if result.reasons:
        lines.append("")
        lines.append("Reasons:")
        lines.extend(f"  - {reason}" for reason in result.reasons)

    return "\n".join(lines)


def result_to_dict(record: ScreeningRecord, result: EvaluationResult) -> dict[str, Any]:
    return {
        "mint": record.mint,
        "verdict": result.verdict.value,
        "reasons": list(result.reasons),
        "metrics": {
            "total_holders": record.total_holders,
            "score": record.score,
            "score_normalised": record.score_normalised,
            "top_holder_pct": record.top_holder_pct,
            "market_cap": record.market_cap,
            "mcap_per_holder": record.mcap_per_holder,
            "lp_locked_pct": record.lp_locked_pct,
            "total_lp_providers": record.total_lp_providers,
            "graph_insiders_detected": record.graph_insiders_detected,
            "rugged": record.rugged,
            "insiders_pct": record.insiders_pct,
            "bluechip_pct": record.bluechip_pct,
            "bundler_pct": record.bundler_pct,
            "bundler_supply_pct": record.bundler_supply_pct,
            "bundled_ratio": record.bundled_ratio,
            "bundler_holder_ratio": record.bundler_holder_ratio,
            "fresh_ratio": record.fresh_ratio,
            "fresh_wallet_count": record.fresh_wallet_count,
            "insider_count": record.insider_count,
            "bluechip_owner_count": record.bluechip_owner_count,
            "bundler_count": record.bundler_count,
            "dex_bot_count": record.dex_bot_count,
            "sniper_count": record.sniper_count,
            "dev_count": record.dev_count,
        },
        "risks": [risk.model_dump() for risk in record.risks],
        "top_holders": len(record.top_holders),
    }


def _fmt(val: float | int | None, spec: str = "") -> str:
    return "n/a" if val is None else format(val, spec)


def _fmt_pct(val: float | None) -> str:
    return "n/a" if val is None else f"{val:.2f}%"


def _fmt_usd(val: float | None) -> str:
    return "n/a" if val is None else f"${val:,.2f}"
