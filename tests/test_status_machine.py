import pytest

from lavajato.core.exceptions import InvalidStatusTransition
from lavajato.models.enums.order_status import OrderStatus as S
from lavajato.services.orders.status_machine import (
    BOARD_STAGES,
    NEXT_STATUS,
    allowed_transitions,
    can_transition,
    ensure_transition,
    is_terminal,
    next_status,
)


class TestNextStatus:
    def test_forward_mapping_is_exact(self):
        assert NEXT_STATUS == {
            S.AWAITING: S.WASHING,
            S.WASHING: S.FINISHING,
            S.FINISHING: S.READY,
            S.READY: S.DELIVERED,
        }

    def test_delivered_has_no_successor(self):
        assert next_status(S.DELIVERED) is None
        assert is_terminal(S.DELIVERED)
        assert not is_terminal(S.READY)

    def test_accepts_raw_values(self):
        assert next_status("WASHING") == S.FINISHING

    def test_board_never_shows_delivered(self):
        assert S.DELIVERED not in BOARD_STAGES
        assert BOARD_STAGES == (S.AWAITING, S.WASHING, S.FINISHING, S.READY)


class TestTransitions:
    def test_skipping_forward_allowed_by_default(self):
        assert allowed_transitions(S.AWAITING) == {S.WASHING, S.FINISHING, S.READY, S.DELIVERED}

    def test_strict_mode_allows_only_next_stage(self):
        assert allowed_transitions(S.AWAITING, allow_skip=False) == {S.WASHING}
        with pytest.raises(InvalidStatusTransition):
            ensure_transition(S.AWAITING, S.READY, allow_skip=False)

    @pytest.mark.parametrize(
        "current,target",
        [
            (S.WASHING, S.AWAITING),
            (S.READY, S.FINISHING),
            (S.DELIVERED, S.READY),
            (S.WASHING, S.WASHING),
        ],
    )
    def test_backward_and_same_status_rejected(self, current, target):
        with pytest.raises(InvalidStatusTransition) as exc:
            ensure_transition(current, target)

        assert exc.value.status_code == 400
        assert exc.value.current == current
        assert exc.value.details == {
            "current_status": current.value,
            "target_status": target.value,
        }

    def test_delivered_is_terminal_even_with_skip(self):
        assert allowed_transitions(S.DELIVERED) == frozenset()

    def test_can_transition_mirrors_ensure_transition(self):
        assert can_transition(S.WASHING, S.READY) is True
        assert can_transition(S.WASHING, S.READY, allow_skip=False) is False
        assert can_transition("FINISHING", "READY", allow_skip=False) is True
        assert can_transition(S.READY, S.WASHING) is False
