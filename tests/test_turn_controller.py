import random

import pytest

from runtime.agents.turn_controller import TurnController, TurnDecision, draw_turn_limit
from runtime.models.session_models import SessionState, SessionStatus


def _state(turn_limit=3, **kwargs):
    return SessionState(session_id="s-1", turn_limit=turn_limit, **kwargs)


def test_turn_limit_draws_stay_within_3_and_10():
    rng = random.Random(0)
    draws = [draw_turn_limit(rng) for _ in range(2000)]

    assert min(draws) == 3
    assert max(draws) == 10
    assert set(draws) == set(range(3, 11))


def test_turn_limit_honors_custom_bounds():
    rng = random.Random(0)
    assert {draw_turn_limit(rng, 4, 4) for _ in range(20)} == {4}


def test_each_turn_increments_by_exactly_one():
    controller = TurnController(random.Random(0))
    state = _state(turn_limit=5)

    seen = []
    for _ in range(4):
        assert controller.register_turn(state) is TurnDecision.RESPOND
        seen.append(state.turn_count)

    assert seen == [1, 2, 3, 4]
    assert state.status is SessionStatus.ACTIVE


def test_reaching_the_limit_terminates():
    controller = TurnController(random.Random(0))
    state = _state(turn_limit=3)

    decisions = [controller.register_turn(state) for _ in range(3)]

    assert decisions == [TurnDecision.RESPOND, TurnDecision.RESPOND, TurnDecision.TERMINATE]
    assert state.status is SessionStatus.TERMINATED


def test_terminated_is_absorbing():
    controller = TurnController(random.Random(0))
    state = _state(turn_limit=3)
    for _ in range(3):
        controller.register_turn(state)

    for _ in range(5):
        assert controller.register_turn(state) is TurnDecision.IGNORE
    assert state.turn_count == 3
    assert state.status is SessionStatus.TERMINATED


def test_disabled_input_is_ignored():
    controller = TurnController(random.Random(0))
    state = _state(turn_limit=3, input_enabled=False)

    assert not controller.accepts_input(state)
    assert controller.register_turn(state) is TurnDecision.IGNORE
    assert state.turn_count == 0


@pytest.mark.parametrize("value, expected", [(0.9, True), (0.51, True), (0.5, False), (0.1, False)])
def test_coin_flip_threshold(value, expected):
    class Fixed(random.Random):
        def random(self):
            return value

    assert TurnController(Fixed()).flip_for_cat_fact() is expected


def test_coin_flip_is_roughly_fair():
    controller = TurnController(random.Random(99))
    cats = sum(controller.flip_for_cat_fact() for _ in range(4000))
    assert 1800 < cats < 2200
