"""Tests for Card and Deck."""

import random

import pytest

from holdem_coach.utils.card import Card, Deck
from holdem_coach.utils.constants import Rank, Suit


class TestCard:
    def test_from_str(self):
        card = Card.from_str("Ah")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.HEARTS
        assert card.value == 14

    def test_ten_spellings(self):
        assert Card.from_str("10d") == Card.from_str("Td")

    def test_case_insensitive(self):
        assert Card.from_str("aH") == Card.from_str("Ah")

    @pytest.mark.parametrize("bad", ["", "A", "Ax", "1h", "Ahh", "11d"])
    def test_invalid_strings(self, bad):
        with pytest.raises(ValueError):
            Card.from_str(bad)

    def test_str_and_pretty(self):
        card = Card.from_str("Ts")
        assert str(card) == "Ts"
        assert card.pretty() == "T♠"

    def test_hashable(self):
        assert len({Card.from_str("Ah"), Card.from_str("Ah"), Card.from_str("Ad")}) == 2

    def test_ordering_by_rank(self):
        assert Card.from_str("2c") < Card.from_str("Kd")


class TestDeck:
    def test_full_deck(self):
        deck = Deck(random.Random(1))
        assert deck.remaining == 52
        assert len(set(deck.deal(52))) == 52

    def test_deal_reduces_remaining(self):
        deck = Deck(random.Random(1))
        deck.deal(5)
        assert deck.remaining == 47

    def test_overdeal_raises(self):
        deck = Deck(random.Random(1))
        deck.deal(50)
        with pytest.raises(ValueError):
            deck.deal(3)

    def test_seeded_decks_match(self):
        assert Deck(random.Random(7)).deal(5) == Deck(random.Random(7)).deal(5)

    def test_remove(self):
        deck = Deck(random.Random(1))
        known = [Card.from_str("Ah"), Card.from_str("Kd")]
        deck.remove(known)
        assert deck.remaining == 50
        assert not set(known) & set(deck.deal(50))

    def test_remove_missing_raises(self):
        deck = Deck(random.Random(1))
        card = deck.deal_one()
        with pytest.raises(ValueError):
            deck.remove([card])
