"""Mint address validation."""

from solders.pubkey import Pubkey  # type: ignore[import-untyped]


class InvalidMintError(ValueError):
    pass


def validate_mint(raw: str) -> str:
    """Return the canonical base58 mint, or raise InvalidMintError.

    Surrounding whitespace (e.g. from an interactive prompt) is ignored.
    """
    candidate = raw.strip()
    if not candidate:
        raise InvalidMintError("empty token address")
    try:
        pubkey = Pubkey.from_string(candidate)
    except ValueError as e:
        raise InvalidMintError(f"invalid token address {candidate!r}: {e}") from e
    return str(pubkey)
