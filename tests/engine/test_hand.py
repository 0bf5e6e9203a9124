"""Tests for Hand evaluation."""

from hypothesis import given, strategies as st

from engine.cards import Card, Rank, Suit
from engine.hand import Hand, compare_hands


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=1, max_cards=8):
    """Generate a random hand."""
    return Hand(tuple(draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards))))


def _hard_total(hand: Hand) -> int:
    """Total with every Ace counted as 1."""
    return sum(1 if card.is_ace else card.value for card in hand)


class TestHand:
    """Tests for the Hand class."""

    def test_empty_hand(self):
        """Test empty hand properties."""
        hand = Hand()
        assert len(hand) == 0
        assert hand.value == 0
        assert not hand.is_soft
        assert not hand.is_blackjack
        assert not hand.is_busted

    def test_with_card_returns_new_hand(self, hard_16_hand):
        """Test that adding a card leaves the original alone."""
        bigger = hard_16_hand.with_card(Card(Rank.TWO, Suit.CLUBS))
        assert len(hard_16_hand) == 2
        assert bigger.value == 18

    def test_hard_hand_value(self, hard_16_hand):
        """Test hard hand value calculation."""
        assert hard_16_hand.value == 16
        assert hard_16_hand.is_hard

    def test_soft_hand_value(self, soft_17_hand):
        """Test soft hand value calculation."""
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_soft_17_plus_king_is_hard_17(self, soft_17_hand):
        """Test that A-6-K counts the Ace as 1."""
        hand = soft_17_hand.with_card(Card(Rank.KING, Suit.CLUBS))
        assert hand.value == 17
        assert hand.is_hard
        assert not hand.is_blackjack

    def test_blackjack(self, blackjack_hand):
        """Test blackjack detection."""
        assert blackjack_hand.is_blackjack
        assert blackjack_hand.value == 21
        assert blackjack_hand.is_soft

    def test_not_blackjack_three_cards(self, cards):
        """Test that 21 with 3+ cards is not blackjack."""
        hand = Hand(cards("7S", "7H", "7C"))
        assert hand.value == 21
        assert not hand.is_blackjack

    def test_bust(self, bust_hand):
        """Test bust detection."""
        assert bust_hand.is_busted
        assert bust_hand.value == 26

    def test_multiple_aces(self, cards):
        """Test hand with multiple aces."""
        assert Hand(cards("AS", "AH")).value == 12
        assert Hand(cards("AS", "AH", "AC")).value == 13
        hand = Hand(cards("AS", "AH", "AC", "9D"))
        assert hand.value == 12
        assert hand.is_hard

    def test_pair_detection(self, pair_8s_hand, cards):
        """Test pair detection by rank."""
        assert pair_8s_hand.is_pair
        assert not Hand(cards("KS", "QH")).is_pair
        assert not Hand(cards("8S", "8H", "2C")).is_pair

    def test_face_down_card_is_not_counted(self, cards):
        """Test that a hidden hole card stays out of the visible total."""
        up, hole = cards("KS", "AH")
        hand = Hand((up, hole.turned_down()))

        assert hand.value == 10
        assert hand.has_hidden_card
        assert hand.up_card == up
        assert hand.is_blackjack  # the peek counts the hole card
        assert hand.revealed().value == 21
        assert not hand.revealed().has_hidden_card

    @given(hand_strategy())
    def test_value_is_best_total_not_over_21(self, hand):
        """Property: the total is the largest reachable one, preferring <= 21."""
        hard = _hard_total(hand)
        has_ace = any(card.is_ace for card in hand)

        if hand.is_soft:
            assert hand.value == hard + 10
            assert hand.value <= 21
        else:
            assert hand.value == hard
            assert not (has_ace and hard + 10 <= 21)

    @given(hand_strategy())
    def test_busted_iff_over_21(self, hand):
        """Property: a hand is busted exactly when even its hard total exceeds 21."""
        assert hand.is_busted == (_hard_total(hand) > 21)


class TestCompareHands:
    """Tests for settling a hand against the dealer."""

    def test_higher_total_wins(self, cards):
        assert compare_hands(Hand(cards("10H", "QS")), Hand(cards("10C", "9D"))) == 1

    def test_lower_total_loses(self, cards):
        assert compare_hands(Hand(cards("10H", "8S")), Hand(cards("10C", "9D"))) == -1

    def test_equal_totals_push(self, cards):
        assert compare_hands(Hand(cards("10H", "8S")), Hand(cards("9C", "9D"))) == 0

    def test_player_bust_loses_even_if_dealer_busts(self, bust_hand, cards):
        """Test that the player's bust settles first."""
        dealer = Hand(cards("10C", "6D", "QH"))
        assert compare_hands(bust_hand, dealer) == -1

    def test_dealer_bust_pays(self, hard_16_hand, cards):
        assert compare_hands(hard_16_hand, Hand(cards("10C", "6D", "QH"))) == 1

    def test_both_blackjack_push(self, blackjack_hand, cards):
        assert compare_hands(blackjack_hand, Hand(cards("AC", "QD"))) == 0

    def test_blackjack_beats_three_card_21(self, blackjack_hand, cards):
        assert compare_hands(blackjack_hand, Hand(cards("7C", "7D", "7H"))) == 1

    def test_dealer_blackjack_beats_three_card_21(self, cards):
        assert compare_hands(Hand(cards("7C", "7D", "7H")), Hand(cards("AC", "QD"))) == -1

    def test_split_21_is_not_a_natural(self, blackjack_hand, cards):
        """Test overriding natural detection for a hand born of a split."""
        assert compare_hands(blackjack_hand, Hand(cards("10C", "9D")), player_has_blackjack=False) == 1
        assert compare_hands(blackjack_hand, Hand(cards("AC", "QD")), player_has_blackjack=False) == -1
