"""
Tests for trick resolution and follow-suit rules
"""

import pytest

from shrinkdeck_core import Card, Player, Suit, Trick, determine_trick_winner


def c(card_id):
    return Card.from_id(card_id)


class TestTrickWinner:
    """Test trick winner determination"""

    def test_trump_beats_higher_lead_suit_cards(self):
        # Hearts led, Spades trump: a low spade beats every heart
        plays = [("a", c("HA")), ("b", c("HK")), ("c", c("S2")), ("d", c("HQ"))]
        assert determine_trick_winner(plays, Suit.SPADES, Suit.HEARTS) == "c"

    def test_highest_trump_wins(self):
        plays = [("a", c("H5")), ("b", c("S9")), ("c", c("S2")), ("d", c("SJ"))]
        assert determine_trick_winner(plays, Suit.SPADES, Suit.HEARTS) == "d"

    def test_highest_lead_suit_wins_without_trump(self):
        plays = [("a", c("D5")), ("b", c("DK")), ("c", c("D10"))]
        assert determine_trick_winner(plays, Suit.SPADES, Suit.DIAMONDS) == "b"

    def test_off_suit_cannot_win(self):
        plays = [("a", c("D3")), ("b", c("CA")), ("c", c("HA"))]
        assert determine_trick_winner(plays, Suit.SPADES, Suit.DIAMONDS) == "a"

    def test_trump_led(self):
        plays = [("a", c("S4")), ("b", c("S3")), ("c", c("HA"))]
        assert determine_trick_winner(plays, Suit.SPADES, Suit.SPADES) == "a"

    def test_empty_trick(self):
        assert determine_trick_winner([], Suit.SPADES, Suit.HEARTS) is None


class TestTrick:
    def test_first_card_sets_lead_suit(self):
        trick = Trick(Suit.CLUBS)
        trick.add_card("a", c("H7"))
        trick.add_card("b", c("C2"))

        assert trick.lead_suit == Suit.HEARTS
        assert trick.is_complete(2)
        assert trick.get_winner() == "b"

    def test_clear(self):
        trick = Trick(Suit.CLUBS)
        trick.add_card("a", c("H7"))
        trick.clear()

        assert trick.plays == []
        assert trick.lead_suit is None
        assert not trick.is_complete(2)

    def test_winner_of_empty_trick_raises(self):
        with pytest.raises(ValueError):
            Trick(Suit.CLUBS).get_winner()


class TestFollowSuit:
    """Test which cards a player may play"""

    def test_must_follow_suit_when_able(self):
        player = Player("p", "P")
        player.hand = [c("H9"), c("H10"), c("C9"), c("S2")]

        valid = player.get_valid_cards(Suit.HEARTS)

        assert valid == [c("H9"), c("H10")]

    def test_any_card_when_void_in_lead_suit(self):
        player = Player("p", "P")
        player.hand = [c("C9"), c("S2")]

        assert player.get_valid_cards(Suit.HEARTS) == player.hand

    def test_any_card_when_leading(self):
        player = Player("p", "P")
        player.hand = [c("H9"), c("C9")]

        assert player.get_valid_cards(None) == player.hand
