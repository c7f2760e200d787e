"""Tests for deck generation and the initial layout."""

from collections import Counter

import pytest

from patience.game.deck import board_from_deck, deck, group_stock
from patience.game.shuffler import IdentityShuffler, RandomShuffler
from patience.models.card import SUIT_PALETTE, Orientation, Rank, Suit
from patience.models.game_type import DEFAULT_GAME_TYPES, GameType


@pytest.fixture
def easy():
    return GameType(
        name="Easy",
        num_foundations=1,
        num_suits=1,
        num_tableau_cards=6,
        tableau_col_sizes=(1, 2, 3),
    )


class TestDeck:
    """Tests for deck generation."""

    @pytest.mark.parametrize("game_type", DEFAULT_GAME_TYPES, ids=lambda g: g.name)
    def test_deck_shape(self, game_type):
        """Test length, orientation and identities of every built-in deck."""
        cards = deck(game_type)

        assert len(cards) == game_type.num_foundations * 13
        assert all(c.orientation == Orientation.FACE_DOWN for c in cards)
        assert [c.identity for c in cards] == list(range(1, len(cards) + 1))

    @pytest.mark.parametrize("game_type", DEFAULT_GAME_TYPES, ids=lambda g: g.name)
    def test_suits_evenly_represented(self, game_type):
        """Test that each suit in play appears equally often."""
        counts = Counter(c.suit for c in deck(game_type))
        expected = game_type.num_foundations * 13 // game_type.num_suits

        assert set(counts) == set(SUIT_PALETTE[: game_type.num_suits])
        assert all(n == expected for n in counts.values())

    @pytest.mark.parametrize("game_type", DEFAULT_GAME_TYPES, ids=lambda g: g.name)
    def test_each_rank_once_per_foundation(self, game_type):
        """Test that every rank appears once per logical deck."""
        counts = Counter(c.rank for c in deck(game_type))
        assert all(counts[rank] == game_type.num_foundations for rank in Rank)

    def test_single_suit_deck_order(self, easy):
        """Test that a one-deck game is Ace to King of spades."""
        cards = deck(easy)
        assert [c.rank for c in cards] == list(Rank)
        assert {c.suit for c in cards} == {Suit.SPADE}

    def test_deck_is_deterministic(self, easy):
        """Test that the same game type always gives the same deck."""
        assert deck(easy) == deck(easy)


class TestBoardFromDeck:
    """Tests for the initial layout."""

    @pytest.mark.parametrize("game_type", DEFAULT_GAME_TYPES, ids=lambda g: g.name)
    def test_partition(self, game_type):
        """Test column sizes, spare cells, stock groups and conservation."""
        cards = RandomShuffler(seed=7).shuffle(deck(game_type))
        board = board_from_deck(game_type, cards)

        assert [len(board.tableau[i]) for i in range(game_type.column_count)] == list(
            game_type.tableau_col_sizes
        )
        assert board.spare == [
            cards[game_type.num_tableau_cards].face_up(),
            cards[game_type.num_tableau_cards + 1].face_up(),
        ]
        assert board.stock_count() == game_type.stock_size
        assert all(len(g) <= game_type.column_count for g in board.stock)
        assert board.identities() == sorted(c.identity for c in cards)
        assert board.foundations == [[] for _ in range(game_type.num_foundations)]

    def test_columns_take_cards_in_order(self, easy):
        """Test that columns are filled from the front of the deck."""
        cards = deck(easy)
        board = board_from_deck(easy, cards)

        assert [c.identity for c in board.tableau[0]] == [1]
        assert [c.identity for c in board.tableau[1]] == [2, 3]
        assert [c.identity for c in board.tableau[2]] == [4, 5, 6]
        assert [c.identity for c in board.spare] == [7, 8]
        assert [[c.identity for c in g] for g in board.stock] == [[9, 10, 11], [12, 13]]

    def test_only_column_tops_face_up(self, easy):
        """Test orientation after the deal."""
        board = board_from_deck(easy, deck(easy))

        for column in board.tableau.values():
            assert column[-1].is_face_up
            assert not any(c.is_face_up for c in column[:-1])
        assert all(c.is_face_up for c in board.spare)
        assert not any(c.is_face_up for g in board.stock for c in g)

    def test_short_deck_leaves_spare_empty(self):
        """Test that spare cells stay empty when the deck runs out."""
        game_type = GameType(
            name="Full",
            num_foundations=1,
            num_suits=1,
            num_tableau_cards=12,
            tableau_col_sizes=(6, 6),
        )
        board = board_from_deck(game_type, deck(game_type))

        assert board.spare[0] is not None
        assert board.spare[1] is None
        assert board.stock == []

    def test_identity_shuffler_keeps_order(self, easy):
        """Test the scripted shuffler."""
        cards = deck(easy)
        assert IdentityShuffler().shuffle(cards) == cards

    def test_seeded_shuffle_is_repeatable(self, easy):
        """Test that the same seed gives the same deal."""
        first = board_from_deck(easy, RandomShuffler(seed=3).shuffle(deck(easy)))
        second = board_from_deck(easy, RandomShuffler(seed=3).shuffle(deck(easy)))
        assert first == second


class TestGroupStock:
    """Tests for stock grouping."""

    def test_groups_match_column_count(self, easy):
        """Test that stock groups have one card per column."""
        groups = group_stock(deck(easy)[:7], 3)
        assert [len(g) for g in groups] == [3, 3, 1]

    def test_empty_stock(self):
        """Test grouping no cards."""
        assert group_stock([], 4) == []
