"""Tests for mint address validation."""

import pytest

from src.utils.mint import InvalidMintError, validate_mint

WSOL = "So11111111111111111111111111111111111111112"


class TestValidateMint:
    def test_valid_address(self) -> None:
        assert validate_mint(WSOL) == WSOL

    def test_whitespace_stripped(self) -> None:
        assert validate_mint(f"  {WSOL}\n") == WSOL

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "0OIl" * 11, WSOL + "xyz"])
    def test_invalid_addresses(self, raw: str) -> None:
        with pytest.raises(InvalidMintError):
            validate_mint(raw)

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_mint("not-a-key")
