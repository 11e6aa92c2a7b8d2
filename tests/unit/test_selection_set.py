"""Unit tests for SelectionSet (bet slip composition)."""

import pytest

from src.sb_common.enums import BetType, MarketKind, Outcome
from src.sb_common.errors import InvalidOddsError
from src.sb_odds.domain.models import LegKey, Selection
from src.sb_odds.domain.selection_set import SelectionSet

HOME = LegKey("evt-1", MarketKind.MONEYLINE, Outcome.HOME)
AWAY = LegKey("evt-1", MarketKind.MONEYLINE, Outcome.AWAY)
OVER = LegKey("evt-2", MarketKind.TOTAL, Outcome.OVER)


class TestToggle:
    def test_new_leg_inserted_active(self) -> None:
        slip = SelectionSet()
        assert slip.toggle(HOME, -150, "NBA", "Celtics @ Knicks") is True
        assert slip.is_active(HOME)
        assert slip.active_count == 1

    def test_double_toggle_restores_prior_state(self) -> None:
        slip = SelectionSet()
        slip.toggle(AWAY, 130)
        before = [s.key for s in slip.active_legs()]

        slip.toggle(HOME, -150)
        slip.toggle(HOME, -150)

        assert [s.key for s in slip.active_legs()] == before
        assert not slip.is_active(HOME)

    def test_toggle_refreshes_odds_and_keeps_metadata(self) -> None:
        slip = SelectionSet()
        slip.toggle(HOME, -150, "NBA", "Celtics @ Knicks")
        slip.toggle(HOME, -140)

        leg = slip.get(HOME)
        assert leg is not None
        assert leg.odds == -140
        assert leg.league == "NBA"
        assert leg.event_label == "Celtics @ Knicks"

    def test_zero_odds_rejected(self) -> None:
        slip = SelectionSet()
        with pytest.raises(InvalidOddsError):
            slip.toggle(HOME, 0)
        assert len(slip) == 0


class TestRemoveAndClear:
    def test_remove_deactivates_without_forgetting(self) -> None:
        slip = SelectionSet()
        slip.toggle(HOME, -150, "NBA", "Celtics @ Knicks")
        slip.remove(HOME)

        assert not slip.is_active(HOME)
        assert HOME in slip
        assert slip.toggle(HOME, -150) is True
        assert slip.get(HOME).league == "NBA"  # type: ignore[union-attr]

    def test_remove_unknown_key_is_noop(self) -> None:
        slip = SelectionSet()
        slip.remove(HOME)
        assert len(slip) == 0

    def test_clear_empties_everything(self) -> None:
        slip = SelectionSet()
        slip.toggle(HOME, -150)
        slip.toggle(OVER, -110)
        slip.clear()
        assert len(slip) == 0
        assert list(slip.active_legs()) == []


class TestActiveLegs:
    def test_is_lazy_and_filters_inactive(self) -> None:
        slip = SelectionSet()
        slip.toggle(HOME, -150)
        slip.toggle(OVER, -110)
        slip.remove(HOME)

        legs = slip.active_legs()
        assert not isinstance(legs, list)
        assert [s.key for s in legs] == [OVER]

    def test_add_overwrites_snapshot(self) -> None:
        slip = SelectionSet()
        slip.add(Selection("evt-1", MarketKind.MONEYLINE, Outcome.HOME, -150))
        slip.add(Selection("evt-1", MarketKind.MONEYLINE, Outcome.HOME, -120))
        assert len(slip) == 1
        assert slip.get(HOME).odds == -120  # type: ignore[union-attr]


class TestInferredMode:
    def test_one_leg_is_single(self) -> None:
        slip = SelectionSet()
        slip.toggle(HOME, -150)
        assert slip.inferred_mode is BetType.SINGLE

    def test_two_active_legs_suggest_parlay(self) -> None:
        slip = SelectionSet()
        slip.toggle(HOME, -150)
        slip.toggle(OVER, -110)
        assert slip.inferred_mode is BetType.PARLAY

    def test_inactive_legs_do_not_count(self) -> None:
        slip = SelectionSet()
        slip.toggle(HOME, -150)
        slip.toggle(OVER, -110)
        slip.remove(OVER)
        assert slip.inferred_mode is BetType.SINGLE
