"""Immutable game state representation."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Rank(Enum):
    """Playing card ranks."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


class Suit(Enum):
    """Playing card suits, in tie-break order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Turn(Enum):
    """Side allowed to act next."""

    PLAYER = "player"
    OPPONENT = "opponent"


class GameStatus(Enum):
    """Game-level phase."""

    PLAYING = "playing"
    PAUSED = "paused"
    WON = "won"
    LOST = "lost"
    SUIT_SELECTION = "suit_selection"


@dataclass(frozen=True)
class Card:
    """Immutable playing card."""

    id: str
    rank: Rank
    suit: Suit
    face_up: bool = False

    def flipped(self, face_up: bool) -> "Card":
        """Return a copy with the given visibility."""
        if self.face_up == face_up:
            return self
        return replace(self, face_up=face_up)

    @property
    def is_eight(self) -> bool:
        return self.rank == Rank.EIGHT

    def __str__(self) -> str:
        return f"{self.rank.value} of {self.suit.value}"


@dataclass(frozen=True)
class GameState:
    """Immutable game state.

    All sequences are tuples. The end of ``deck`` is its top and the end of
    ``discard`` is the top card used for legality checks.
    """

    deck: tuple[Card, ...]
    player_hand: tuple[Card, ...]
    opponent_hand: tuple[Card, ...]
    discard: tuple[Card, ...]
    turn: Turn = Turn.PLAYER
    status: GameStatus = GameStatus.PLAYING
    wild_suit: Optional[Suit] = None
    last_action: str = ""
    hint: str = ""

    @property
    def top_card(self) -> Optional[Card]:
        """Top of the discard pile, if any."""
        return self.discard[-1] if self.discard else None

    def copy_with(self, **changes) -> "GameState":  # type: ignore
        """Create a new state with specified changes."""
        current = {
            "deck": self.deck,
            "player_hand": self.player_hand,
            "opponent_hand": self.opponent_hand,
            "discard": self.discard,
            "turn": self.turn,
            "status": self.status,
            "wild_suit": self.wild_suit,
            "last_action": self.last_action,
            "hint": self.hint,
        }
        current.update(changes)
        return GameState(**current)
