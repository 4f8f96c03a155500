"""Shared test fixtures — sample source documents for one healthy token."""

from typing import Any

import pytest

MINT = "So11111111111111111111111111111111111111112"


@pytest.fixture
def mint() -> str:
    return MINT


@pytest.fixture
def rugcheck_report() -> dict[str, Any]:
    """Trimmed /v1/tokens/{mint}/report response."""
    return {
        "mint": MINT,
        "creator": "7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU",
        "creatorBalance": 0,
        "token": {"supply": 1_000_000_000_000_000, "decimals": 6},
        "topHolders": [
            {"address": "HoLd1111111111111111111111111111111111111111", "pct": 3.0},
            {"address": "HoLd2222222222222222222222222222222222222222", "pct": 2.1},
        ],
        "risks": [
            {
                "name": "Mutable metadata",
                "value": "",
                "description": "Token metadata can be changed by the owner",
                "score": 100,
                "level": "warn",
            },
        ],
        "score": 101,
        "score_normalised": 5,
        "markets": [{"lp": {"lpLockedPct": 100.0}}],
        "totalLPProviders": 12,
        "totalHolders": 1000,
        "graphInsidersDetected": 2,
        "rugged": False,
        "price": 0.0001,
    }


@pytest.fixture
def holder_stat_doc() -> dict[str, Any]:
    """GMGN token_holder_stat response."""
    return {
        "code": 0,
        "msg": "success",
        "data": {
            "fresh_wallet_count": 120,
            "insider_count": 10,
            "bluechip_owner_count": 20,
            "bundler_count": 150,
            "dex_bot_count": 4,
            "sniper_count": 7,
            "dev_count": 1,
        },
    }


@pytest.fixture
def token_holders_doc() -> dict[str, Any]:
    """GMGN token_holders response (amount_percentage is a fraction)."""
    return {
        "code": 0,
        "msg": "success",
        "data": {
            "list": [
                {
                    "address": "W1",
                    "amount_percentage": 0.05,
                    "insider": False,
                    "maker_token_tags": ["bundler"],
                    "tags": ["top_holder"],
                },
                {
                    "address": "W2",
                    "amount_percentage": 0.03,
                    "insider": False,
                    "maker_token_tags": [],
                    "tags": ["bluechip_owner"],
                },
                {
                    "address": "W3",
                    "amount_percentage": 0.02,
                    "insider": True,
                    "maker_token_tags": [],
                    "tags": ["whale"],
                },
                {
                    "address": "W4",
                    "amount_percentage": 0.01,
                    "insider": False,
                    "maker_token_tags": [],
                    "tags": ["top_holder"],
                },
            ]
        },
    }
