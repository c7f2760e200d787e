"""Tests for the game session state machine."""

import random

import pytest

from patience.game.deck import deck
from patience.game.session import GameSession, Phase
from patience.game.shuffler import RandomShuffler
from patience.models.board import Board
from patience.models.card import Rank, Suit
from patience.models.game_type import GameType, GameTypeCatalog, default_catalog
from patience.models.messages import (
    ClearSelection,
    DeckReady,
    MoveSpareToFoundation,
    MoveSpareToTableau,
    MoveStockToTableau,
    MoveTableauToFoundation,
    MoveTableauToTableau,
    Restart,
    SelectSpare,
    SelectTableau,
    ShuffleRequest,
    StartGame,
    Undo,
)
from patience.models.selection import NO_SELECTION, SpareSelection, TableauSelection

EASY = GameType(
    name="Easy",
    num_foundations=1,
    num_suits=1,
    num_tableau_cards=6,
    tableau_col_sizes=(1, 2, 3),
)

TINY = GameType(
    name="Tiny",
    num_foundations=1,
    num_suits=1,
    num_tableau_cards=3,
    tableau_col_sizes=(1, 1, 1),
)


def dealt(game_type: GameType = EASY, order=None) -> GameSession:
    """Start a session and deal the unshuffled deck (or a reordering of it)."""
    session = GameSession(GameTypeCatalog([game_type]))
    request = session.update(StartGame())
    cards = list(request.cards)
    if order is not None:
        cards = [cards[i] for i in order]
    session.update(DeckReady(cards=tuple(cards)))
    return session


def top_to_foundation(session: GameSession, col: int, count: int = 1) -> bool:
    run = session.board.tableau[col][-count:]
    return session.apply(MoveTableauToFoundation(run=run, from_col=col, to_foundation=0))


def top_to_foundation_index(session: GameSession, col: int, foundation: int) -> bool:
    run = session.board.tableau[col][-1:]
    return session.apply(MoveTableauToFoundation(run=run, from_col=col, to_foundation=foundation))


def top_to_column(session: GameSession, from_col: int, to_col: int, count: int = 1) -> bool:
    run = session.board.tableau[from_col][-count:]
    return session.apply(MoveTableauToTableau(run=run, from_col=from_col, to_col=to_col))


def spare_to_foundation(session: GameSession, cell: int) -> bool:
    return session.apply(MoveSpareToFoundation(card=session.board.spare[cell], to_foundation=0))


def play_easy_win(session: GameSession) -> None:
    """Win the unshuffled Easy deal.

    Columns start as [A], [2, 3], [4, 5, 6] with 7 and 8 in the spare cells
    and stock groups [9, 10, J] and [Q, K].
    """
    assert top_to_foundation(session, 0)  # A
    assert top_to_column(session, 1, 0)  # 3 onto the empty column
    assert top_to_foundation(session, 1)  # 2
    assert top_to_foundation(session, 0)  # 3
    assert top_to_column(session, 2, 0)  # 6
    assert top_to_column(session, 2, 0)  # 5 onto 6
    assert top_to_foundation(session, 2)  # 4
    assert top_to_foundation(session, 0, count=2)  # 6, 5
    assert spare_to_foundation(session, 0)  # 7
    assert spare_to_foundation(session, 1)  # 8
    assert session.apply(MoveStockToTableau())
    for col in range(3):  # 9, 10, J
        assert top_to_foundation(session, col)
    assert session.apply(MoveStockToTableau())
    for col in range(2):  # Q, K
        assert top_to_foundation(session, col)


def candidate_moves(session: GameSession) -> list:
    """Every move worth trying on the current board."""
    board = session.board
    moves: list = [MoveStockToTableau()]
    for card in board.spare:
        if card is None:
            continue
        moves.extend(MoveSpareToFoundation(card=card, to_foundation=f) for f in range(len(board.foundations)))
        moves.extend(MoveSpareToTableau(card=card, to_col=c) for c in board.tableau)
    for col, cards in board.tableau.items():
        for row in range(len(cards)):
            run = cards[row:]
            moves.extend(
                MoveTableauToFoundation(run=run, from_col=col, to_foundation=f)
                for f in range(len(board.foundations))
            )
            moves.extend(
                MoveTableauToTableau(run=run, from_col=col, to_col=c) for c in board.tableau if c != col
            )
    return moves


class TestPhases:
    """Tests for phase transitions."""

    def test_starts_waiting_for_deck(self):
        """Test the initial phase."""
        session = GameSession(default_catalog())
        assert session.phase == Phase.NEW_GAME
        assert session.move_count == 0

    def test_start_game_requests_shuffle(self):
        """Test that StartGame asks for the unshuffled deck of the chosen type."""
        session = GameSession(default_catalog())
        request = session.update(StartGame(game_type_index=1))

        assert isinstance(request, ShuffleRequest)
        assert session.game_type.name == "Classic"
        assert list(request.cards) == deck(session.game_type)
        assert session.phase == Phase.NEW_GAME

    def test_unknown_game_type_falls_back(self):
        """Test that an out-of-range index starts the default game."""
        session = GameSession(default_catalog())
        session.update(StartGame(game_type_index=42))
        assert session.game_type == default_catalog().default

    def test_deck_ready_starts_play(self):
        """Test that the deal moves the session to PLAYING."""
        session = dealt()
        assert session.phase == Phase.PLAYING
        assert session.board.identities() == list(range(1, 14))

    def test_deck_ignored_after_deal(self):
        """Test that a second deck is ignored."""
        session = dealt()
        before = session.board.snapshot()

        session.update(DeckReady(cards=tuple(reversed(deck(EASY)))))

        assert session.board == before

    def test_wrong_deck_size_ignored(self):
        """Test that a deck of the wrong length is ignored."""
        session = GameSession(GameTypeCatalog([EASY]))
        session.update(StartGame())

        session.update(DeckReady(cards=tuple(deck(EASY)[:5])))

        assert session.phase == Phase.NEW_GAME

    def test_duplicate_cards_ignored(self):
        """Test that a deck repeating one card is ignored."""
        session = GameSession(GameTypeCatalog([EASY]))
        cards = list(session.update(StartGame()).cards)
        cards[-1] = cards[0]

        session.update(DeckReady(cards=tuple(cards)))

        assert session.phase == Phase.NEW_GAME

    def test_foreign_card_ignored(self):
        """Test that a deck with a card of the wrong suit is ignored."""
        session = GameSession(GameTypeCatalog([EASY]))
        cards = list(session.update(StartGame()).cards)
        cards[3] = cards[3].model_copy(update={"suit": Suit.HEART})

        session.update(DeckReady(cards=tuple(cards)))

        assert session.phase == Phase.NEW_GAME

    def test_face_up_cards_accepted(self):
        """Test that orientation does not matter when checking the deck."""
        session = GameSession(GameTypeCatalog([EASY]))
        cards = [c.face_up() for c in session.update(StartGame()).cards]

        session.update(DeckReady(cards=tuple(reversed(cards))))

        assert session.phase == Phase.PLAYING

    def test_moves_ignored_before_deal(self):
        """Test that moves do nothing while waiting for the deck."""
        session = GameSession(GameTypeCatalog([EASY]))
        session.update(StartGame())

        assert not session.apply(MoveStockToTableau())
        assert session.move_count == 0

    def test_start_game_resets(self):
        """Test that a new game discards the old board and history."""
        session = dealt()
        top_to_foundation(session, 0)

        session.update(StartGame())

        assert session.phase == Phase.NEW_GAME
        assert session.move_count == 0
        assert session.undo_history == []
        assert session.selection == NO_SELECTION


class TestMoves:
    """Tests for applying moves through the session."""

    def test_spare_ace_to_foundation(self):
        """Test a one-card move from a spare cell."""
        # Ace lands in the left spare cell
        session = dealt(TINY, order=[1, 2, 3, 0, *range(4, 13)])
        ace = session.board.spare[0]
        assert ace.rank == Rank.ACE and ace.suit == Suit.SPADE

        session.update(MoveSpareToFoundation(card=ace, to_foundation=0))

        assert session.move_count == 1
        assert session.progress() == 8
        assert session.board.spare[0] is None
        assert session.board.foundations[0] == [ace]
        assert len(session.undo_history) == 1

    def test_rejected_move_changes_nothing(self):
        """Test that an invalid move leaves every field untouched."""
        session = dealt()
        before = session.board.snapshot()

        # 3 cannot go on an empty foundation
        assert not top_to_foundation(session, 1)

        assert session.board == before
        assert session.move_count == 0
        assert session.undo_history == []
        assert session.phase == Phase.PLAYING

    def test_move_count_adds_cards_transferred(self):
        """Test counting a multi-card move."""
        session = dealt()
        play = [
            lambda: top_to_foundation(session, 0),
            lambda: top_to_column(session, 1, 0),
            lambda: top_to_foundation(session, 1),
            lambda: top_to_foundation(session, 0),
            lambda: top_to_column(session, 2, 0),
            lambda: top_to_column(session, 2, 0),
            lambda: top_to_foundation(session, 2),
        ]
        for step in play:
            assert step()
        assert session.move_count == 7

        assert top_to_foundation(session, 0, count=2)
        assert session.move_count == 9

    def test_stock_deal_counts_group(self):
        """Test that a stock deal counts one move per card dealt."""
        session = dealt()
        session.update(MoveStockToTableau())
        assert session.move_count == 3
        session.update(MoveStockToTableau())
        assert session.move_count == 5

    def test_empty_stock_deal_ignored(self):
        """Test that dealing with no stock left is not recorded."""
        session = dealt()
        session.update(MoveStockToTableau())
        session.update(MoveStockToTableau())
        history = len(session.undo_history)

        assert not session.apply(MoveStockToTableau())
        assert len(session.undo_history) == history
        assert session.move_count == 5

    def test_move_clears_selection(self):
        """Test that a successful move drops the selection."""
        session = dealt()
        session.update(SelectTableau(card=session.board.tableau[0][0]))
        assert isinstance(session.selection, TableauSelection)

        top_to_foundation(session, 0)

        assert session.selection == NO_SELECTION

    def test_callbacks(self):
        """Test the move and game-over callbacks."""
        session = dealt()
        moves = []
        finished = []
        session.set_callbacks(
            on_move=lambda move, n: moves.append((move.kind, n)),
            on_game_over=finished.append,
        )

        play_easy_win(session)

        assert moves[0] == ("tableau_to_foundation", 1)
        assert sum(n for _, n in moves) == 21
        assert finished == [session]


class TestSelectionMessages:
    """Tests for selection handling inside the session."""

    def test_select_and_clear(self):
        """Test selecting a spare card and clearing it again."""
        session = dealt()
        card = session.board.spare[1]

        session.update(SelectSpare(card=card))
        assert session.selection == SpareSelection(card=card)

        session.update(ClearSelection())
        assert session.selection == NO_SELECTION

    def test_spare_click_replaces_tableau_selection(self):
        """Test that a spare click while a run is selected selects the spare card."""
        session = dealt()
        session.update(SelectTableau(card=session.board.tableau[2][-1]))

        session.update(SelectSpare(card=session.board.spare[0]))

        assert isinstance(session.selection, SpareSelection)

    def test_selection_ignored_before_deal(self):
        """Test that clicks do nothing before the deal."""
        session = GameSession(GameTypeCatalog([EASY]))
        session.update(StartGame())

        session.update(SelectTableau(card=deck(EASY)[0]))

        assert session.selection == NO_SELECTION


class TestHistory:
    """Tests for undo and restart."""

    def test_undo_restores_board(self):
        """Test that undo is the inverse of the last move."""
        session = dealt()
        before = session.board.snapshot()

        top_to_foundation(session, 0)
        session.update(Undo())

        assert session.board == before
        assert session.undo_history == []
        assert session.undo_used

    def test_undo_steps_back_one_move(self):
        """Test that each undo removes exactly one history entry."""
        session = dealt()
        top_to_foundation(session, 0)
        after_first = session.board.snapshot()
        session.update(MoveStockToTableau())

        session.update(Undo())

        assert session.board == after_first
        assert len(session.undo_history) == 1

    def test_undo_keeps_move_count(self):
        """Test that the move count is not reverted by undo."""
        session = dealt()
        session.update(MoveStockToTableau())
        session.update(Undo())
        assert session.move_count == 3

    def test_undo_without_history(self):
        """Test that undo with nothing to undo is a no-op."""
        session = dealt()
        before = session.board.snapshot()

        assert not session.undo()
        assert session.board == before
        assert not session.undo_used

    def test_restart_restores_deal(self):
        """Test that restart returns to the board as dealt."""
        session = dealt()
        initial = session.board.snapshot()
        top_to_foundation(session, 0)
        top_to_column(session, 1, 0)
        session.update(MoveStockToTableau())

        session.update(Restart())

        assert session.board == initial
        assert session.undo_history == []
        assert session.phase == Phase.PLAYING

    def test_restart_without_history(self):
        """Test that restart before any move is a no-op."""
        session = dealt()
        assert not session.restart()
        assert not session.undo_used

    def test_undo_reveal(self):
        """Test that undo turns a revealed card face down again."""
        session = dealt()
        top_to_foundation(session, 0)
        assert top_to_column(session, 1, 0)
        assert session.board.tableau[1][-1].is_face_up

        session.update(Undo())

        assert not session.board.tableau[1][0].is_face_up


class TestGameOver:
    """Tests for winning."""

    def test_easy_win(self):
        """Test a full game of Easy."""
        session = dealt()

        play_easy_win(session)

        assert session.phase == Phase.GAME_OVER
        assert session.is_over
        assert session.progress() == 100
        assert session.move_count == 21
        assert [c.rank for c in session.board.foundations[0]] == list(Rank)

    def test_large_deck_needs_every_card(self):
        """Test that a rounded 100% progress is not a win."""
        big = GameType(
            name="Sixteen Decks",
            num_foundations=16,
            num_suits=4,
            num_tableau_cards=2,
            tableau_col_sizes=(1, 1),
        )
        session = dealt(big)
        cards = [c.face_up() for c in deck(big)]
        queen, king = cards[-2], cards[-1]
        session.board = Board(
            foundations=[cards[i : i + 13] for i in range(0, 15 * 13, 13)] + [cards[15 * 13 : -2]],
            tableau={0: [king], 1: [queen]},
        )

        assert top_to_foundation_index(session, 1, 15)

        assert session.progress() == 100
        assert not session.is_complete()
        assert session.phase == Phase.PLAYING

        assert top_to_foundation_index(session, 0, 15)

        assert session.is_complete()
        assert session.phase == Phase.GAME_OVER

    def test_game_over_is_terminal(self):
        """Test that nothing but a new game changes a won session."""
        session = dealt()
        play_easy_win(session)
        before = session.board.snapshot()

        session.update(Undo())
        session.update(Restart())
        session.update(MoveStockToTableau())

        assert session.board == before
        assert session.phase == Phase.GAME_OVER

        session.update(StartGame())
        assert session.phase == Phase.NEW_GAME


class TestRandomPlay:
    """Property checks over random play."""

    @pytest.mark.parametrize("game_index", range(len(default_catalog())))
    def test_conservation_and_progress(self, game_index):
        """Test that random play never loses cards or lowers progress."""
        catalog = default_catalog()
        session = GameSession(catalog)
        request = session.update(StartGame(game_type_index=game_index))
        session.update(DeckReady(cards=tuple(RandomShuffler(seed=game_index).shuffle(request.cards))))
        identities = session.board.identities()
        rng = random.Random(game_index)

        progress = session.progress()
        for _ in range(60):
            moves = candidate_moves(session)
            rng.shuffle(moves)
            for move in moves:
                if session.apply(move):
                    break
            assert session.board.identities() == identities
            assert session.progress() >= progress
            progress = session.progress()
            if session.is_over:
                break

    def test_undo_everything_returns_to_deal(self):
        """Test that undoing every move gives back the dealt board."""
        session = GameSession(default_catalog())
        request = session.update(StartGame(game_type_index=1))
        session.update(DeckReady(cards=tuple(RandomShuffler(seed=11).shuffle(request.cards))))
        initial = session.board.snapshot()
        rng = random.Random(11)

        for _ in range(25):
            moves = candidate_moves(session)
            rng.shuffle(moves)
            for move in moves:
                if session.apply(move):
                    break

        while session.undo():
            pass

        assert session.board == initial
