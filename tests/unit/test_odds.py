"""Unit tests for the American odds normalizer."""

from decimal import Decimal

import pytest

from src.sb_common.errors import InvalidOddsError
from src.sb_odds.domain.odds import format_odds, to_american, to_decimal_multiplier, validate_odds


class TestToDecimalMultiplier:
    def test_even_money(self) -> None:
        assert to_decimal_multiplier(100) == Decimal("2")

    def test_underdog(self) -> None:
        assert to_decimal_multiplier(150) == Decimal("2.5")
        assert to_decimal_multiplier(120) == Decimal("2.2")

    def test_favourite(self) -> None:
        assert to_decimal_multiplier(-200) == Decimal("1.5")
        assert round(to_decimal_multiplier(-150), 4) == Decimal("1.6667")
        assert round(to_decimal_multiplier(-110), 3) == Decimal("1.909")

    @pytest.mark.parametrize("odds", [1, 99, 100, 10000, -1, -100, -101, -10000])
    def test_always_greater_than_one(self, odds: int) -> None:
        assert to_decimal_multiplier(odds) > 1

    def test_zero_is_invalid(self) -> None:
        with pytest.raises(InvalidOddsError) as exc_info:
            to_decimal_multiplier(0)
        assert exc_info.value.code == 3001


class TestValidateOdds:
    @pytest.mark.parametrize("bad", [0, True, 1.5, "150", None])
    def test_rejects_non_integer_or_zero(self, bad: object) -> None:
        with pytest.raises(InvalidOddsError):
            validate_odds(bad)  # type: ignore[arg-type]

    def test_accepts_signed_integers(self) -> None:
        validate_odds(-110)
        validate_odds(250)


class TestToAmerican:
    def test_underdog_multiplier(self) -> None:
        assert to_american(Decimal("2.5")) == 150
        assert to_american(Decimal("3.3")) == 230

    def test_favourite_multiplier(self) -> None:
        assert to_american(Decimal("1.5")) == -200

    def test_even_money(self) -> None:
        assert to_american(Decimal("2")) == 100

    def test_round_trip_through_multiplier(self) -> None:
        for odds in (-250, -150, -110, 100, 175, 400):
            assert to_american(to_decimal_multiplier(odds)) == odds

    def test_multiplier_at_or_below_one_has_no_quote(self) -> None:
        with pytest.raises(ValueError):
            to_american(Decimal("1"))


class TestFormatOdds:
    def test_positive_gets_plus_sign(self) -> None:
        assert format_odds(120) == "+120"

    def test_negative_unchanged(self) -> None:
        assert format_odds(-150) == "-150"
