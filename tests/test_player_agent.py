import threading

import pytest

from agents.player import AgentState, PlayerAgent, run_agent
from engine.cards import OPENING_CARD, build_deck, card_value, parse_card
from engine.protocol import (
    ProtocolViolation,
    ResponseKind,
    beat_request,
    lead_request,
    open_request,
)
from engine.transport import ChannelClosed, ThreadTransport


def cards(*tokens):
    return [parse_card(token) for token in tokens]


def test_open_plays_the_opening_card_first():
    agent = PlayerAgent(0, cards("C3", "D3", "S2"))
    response = agent.handle(open_request())
    assert response.kind is ResponseKind.PLAYED
    assert response.card == OPENING_CARD
    assert not response.complete
    assert agent.state is AgentState.WAITING


def test_open_without_opening_card_plays_minimum():
    agent = PlayerAgent(0, cards("HK", "C4", "S2"))
    assert agent.handle(open_request()).card == parse_card("C4")


def test_open_with_only_the_opening_card_completes():
    agent = PlayerAgent(0, [OPENING_CARD])
    response = agent.handle(open_request())
    assert response.card == OPENING_CARD
    assert response.is_complete
    assert agent.done


def test_lead_plays_minimum():
    agent = PlayerAgent(1, cards("SA", "H5", "D9"))
    assert agent.handle(lead_request()).card == parse_card("H5")
    assert agent.hand.cards() == cards("D9", "SA")


def test_beat_plays_smallest_card_above_reference():
    agent = PlayerAgent(1, cards("D5", "H5", "S9", "C2"))
    response = agent.handle(beat_request(parse_card("C5")))
    assert response.card == parse_card("H5")
    assert parse_card("H5") not in agent.hand


def test_beat_passes_when_nothing_is_higher():
    agent = PlayerAgent(1, cards("D5", "H6"))
    response = agent.handle(beat_request(parse_card("S6")))
    assert response.kind is ResponseKind.PASS
    assert len(agent.hand) == 2
    assert agent.state is AgentState.WAITING


def test_beat_choice_is_minimal_for_every_reference():
    held = cards("D4", "C8", "HQ", "S2")
    for reference in build_deck():
        agent = PlayerAgent(0, held)
        response = agent.handle(beat_request(reference))
        above = [card for card in held if card_value(card) > card_value(reference)]
        if above:
            assert response.card == min(above, key=card_value)
            assert card_value(response.card) > card_value(reference)
        else:
            assert response.kind is ResponseKind.PASS


def test_last_card_carries_completion():
    agent = PlayerAgent(2, cards("H7"))
    response = agent.handle(beat_request(parse_card("D7")))
    assert response.kind is ResponseKind.PLAYED
    assert response.complete
    assert agent.done


@pytest.mark.parametrize("request_factory", [open_request, lead_request, lambda: beat_request(OPENING_CARD)])
def test_empty_hand_answers_complete(request_factory):
    agent = PlayerAgent(0, [])
    response = agent.handle(request_factory())
    assert response.kind is ResponseKind.COMPLETE
    assert agent.done


def test_done_agent_is_not_requeried():
    agent = PlayerAgent(0, cards("H7"))
    agent.handle(lead_request())
    response = agent.handle(lead_request())
    assert response.kind is ResponseKind.COMPLETE
    assert agent.done


def test_non_request_is_a_protocol_violation():
    agent = PlayerAgent(0, cards("H7"))
    with pytest.raises(ProtocolViolation):
        agent.handle("LEAD")


def test_serve_answers_until_complete_then_closes():
    transport = ThreadTransport()
    arbiter_end, agent_end = transport.open_channel()
    handle = transport.start_agent(run_agent, (0, cards("D3", "H7"), None), agent_end, name="agent-0")

    arbiter_end.send(open_request())
    assert arbiter_end.recv().card == OPENING_CARD
    arbiter_end.send(beat_request(parse_card("C5")))
    last = arbiter_end.recv()
    assert last.card == parse_card("H7") and last.complete

    handle.join(5)
    assert not handle.is_alive()
    with pytest.raises(ChannelClosed):
        arbiter_end.recv()


def test_serve_exits_when_arbiter_hangs_up():
    transport = ThreadTransport()
    arbiter_end, agent_end = transport.open_channel()
    agent = PlayerAgent(0, cards("D3", "H7"))
    worker = threading.Thread(target=agent.serve, args=(agent_end,), daemon=True)
    worker.start()
    arbiter_end.close()
    worker.join(5)
    assert not worker.is_alive()
    assert len(agent.hand) == 2
