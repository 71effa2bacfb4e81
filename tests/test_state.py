import pytest

from engine.cards import OPENING_CARD, parse_card
from engine.protocol import Command
from engine.state import GameState


def test_initial_state():
    state = GameState(players=4, opening_player=2)
    assert state.current_player == 2
    assert state.active_count == 4
    assert state.next_request().command is Command.OPEN
    assert state.winner is None
    assert state.loser() is None


def test_bad_opening_player():
    with pytest.raises(ValueError):
        GameState(players=2, opening_player=2)


def test_beat_after_a_play_then_lead_after_reset():
    state = GameState(players=3, opening_player=0)
    state.record_play(0, OPENING_CARD)
    request = state.next_request()
    assert request.command is Command.BEAT
    assert request.reference == OPENING_CARD

    state.record_pass(1)
    assert not state.reset_due()
    state.record_pass(2)
    assert state.reset_due()
    state.reset_trick()
    assert state.highest is None
    assert state.pass_count == 0
    assert state.current_player == 0
    assert state.next_request().command is Command.LEAD


def test_play_resets_pass_counter():
    state = GameState(players=3, opening_player=0)
    state.record_play(0, OPENING_CARD)
    state.record_pass(1)
    state.record_play(2, parse_card("S2"))
    assert state.pass_count == 0
    assert state.leader == 2


def test_completion_order_and_winner_recorded_once():
    state = GameState(players=3, opening_player=0)
    assert state.record_completion(1) is True
    assert state.record_completion(1) is False
    assert state.active_count == 2
    assert state.record_completion(0) is False
    assert state.completion_order == [1, 0]
    assert state.winner == 1
    assert state.is_finished()
    assert state.loser() == 2


def test_next_active_skips_completed_agents():
    state = GameState(players=4, opening_player=1)
    state.record_completion(1)
    state.record_dropped(2)
    assert state.next_active() == 3
    assert state.dropped == [2]
    assert state.completion_order == [1]
    state.advance()
    assert state.next_active() == 0


def test_no_reset_once_the_game_is_over():
    state = GameState(players=2, opening_player=0)
    state.record_play(0, OPENING_CARD)
    state.record_completion(0)
    assert state.is_finished()
    assert not state.reset_due()


def test_finished_leader_needs_every_remaining_agent_to_pass():
    state = GameState(players=3, opening_player=0)
    state.record_play(0, parse_card("H2"))
    state.record_completion(0)
    state.advance()
    state.record_pass(1)
    assert not state.reset_due()
    assert state.next_request().command is Command.BEAT
    state.record_pass(2)
    assert state.reset_due()
