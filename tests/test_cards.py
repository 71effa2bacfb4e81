import pytest

from engine.cards import (
    OPENING_CARD,
    Card,
    InvalidCardToken,
    Rank,
    Suit,
    beats,
    build_deck,
    card_value,
    parse_card,
    sort_cards,
)


def test_values_are_unique_across_the_deck():
    deck = build_deck()
    assert len(deck) == 52
    assert len({card_value(card) for card in deck}) == 52


def test_rank_dominates_suit():
    assert card_value(Card(Rank.FOUR, Suit.DIAMONDS)) > card_value(Card(Rank.THREE, Suit.SPADES))
    assert card_value(Card(Rank.TWO, Suit.DIAMONDS)) > card_value(Card(Rank.ACE, Suit.SPADES))
    assert card_value(Card(Rank.ACE, Suit.CLUBS)) > card_value(Card(Rank.KING, Suit.SPADES))


def test_suit_breaks_ties():
    order = [Suit.DIAMONDS, Suit.CLUBS, Suit.HEARTS, Suit.SPADES]
    values = [card_value(Card(Rank.SEVEN, suit)) for suit in order]
    assert values == sorted(values)


def test_opening_card_is_lowest_and_two_of_spades_highest():
    deck = build_deck()
    assert deck[0] == OPENING_CARD
    assert sort_cards(reversed(deck))[-1] == Card(Rank.TWO, Suit.SPADES)


def test_beats_is_strict():
    card = parse_card("H9")
    assert not beats(card, card)
    assert beats(parse_card("S9"), card)
    assert not beats(parse_card("C9"), card)


def test_parse_card_accepts_both_spellings():
    assert parse_card("D3") == OPENING_CARD
    assert parse_card("3d") == OPENING_CARD
    assert parse_card("ht") == Card(Rank.TEN, Suit.HEARTS)
    assert str(parse_card("AS")) == "SA"


@pytest.mark.parametrize("token", ["", "D", "D10", "X3", "D1", "33", "DD"])
def test_parse_card_rejects_garbage(token):
    with pytest.raises(InvalidCardToken):
        parse_card(token)
