"""Entry point for the token rug screen.

Usage:
    python -m src.main <MINT> [--json] [--dump-report]
    python -m src.main            # prompts for the token address

Exit code: 0 = pass, 1 = fail, 2 = invalid token address.
"""

import argparse
import asyncio
import json
import sys

from loguru import logger

from src.parsers.gmgn.client import GmgnClient
from src.parsers.rugcheck.client import RugcheckClient
from src.screening.formatters import format_result, result_to_dict
from src.screening.pipeline import ScreeningOutcome, screen_token
from src.utils.logger import setup_logger
from src.utils.mint import InvalidMintError, validate_mint

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_INVALID_MINT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rug pull screen for a Solana token")
    parser.add_argument("mint", nargs="?", help="token mint address (prompted if omitted)")
    parser.add_argument("--json", action="store_true", help="print the result as JSON")
    parser.add_argument(
        "--dump-report", action="store_true", help="also print the raw Rugcheck report"
    )
    parser.add_argument("--log-level", default=None, help="console log level (default from settings)")
    return parser


async def run(mint: str) -> ScreeningOutcome:
    rugcheck = RugcheckClient()
    try:
        gmgn = GmgnClient()
        try:
            return await screen_token(mint, rugcheck=rugcheck, gmgn=gmgn)
        finally:
            await gmgn.close()
    finally:
        await rugcheck.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level)

    raw = args.mint
    if raw is None:
        try:
            raw = input("please enter token address: ")
        except EOFError:
            logger.error("no token address given (stdin closed)")
            return EXIT_INVALID_MINT

    try:
        mint = validate_mint(raw)
    except InvalidMintError as e:
        logger.error(str(e))
        return EXIT_INVALID_MINT

    outcome = asyncio.run(run(mint))

    if args.dump_report:
        if outcome.report is None:
            print("FULL REPORT: unavailable")
        else:
            print("FULL REPORT")
            print(json.dumps(outcome.report, indent=2))

    if args.json:
        print(json.dumps(result_to_dict(outcome.record, outcome.result), indent=2))
    else:
        print(format_result(outcome.record, outcome.result))

    return EXIT_PASS if outcome.result.passed else EXIT_FAIL


if __name__ == "__main__":
    sys.exit(main())
