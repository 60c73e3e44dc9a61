"""Human input handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from crazyeights.simulation.movegen import is_playable
from crazyeights.simulation.state import GameState, Suit


@dataclass
class InputResult:
    """Result of human input."""

    card_id: Optional[str] = None
    suit: Optional[Suit] = None
    draw: bool = False
    restart: bool = False
    quit: bool = False
    error: Optional[str] = None


class HumanPlayer:
    """Handles human player input."""

    def __init__(self, input_fn: Callable[[str], str] = input) -> None:
        self.input_fn = input_fn

    def _read(self, prompt: str) -> Optional[str]:
        try:
            return self.input_fn(prompt).strip().lower()
        except (EOFError, KeyboardInterrupt):
            return None

    def get_move(self, state: GameState, prompt: str = "> ") -> InputResult:
        """Get a play, draw, restart or quit command.

        Args:
            state: Current state; hand positions are 1-indexed
            prompt: Input prompt string

        Returns:
            InputResult with the chosen command, or an error message
        """
        raw = self._read(prompt)
        if raw is None:
            return InputResult(quit=True)

        if raw in ("q", "quit", "exit"):
            return InputResult(quit=True)
        if raw in ("r", "restart"):
            return InputResult(restart=True)
        if raw in ("d", "draw"):
            return InputResult(draw=True)

        try:
            choice = int(raw)
        except ValueError:
            return InputResult(error=f"Invalid input '{raw}'. Enter a card number, 'd', 'r' or 'q'.")

        hand = state.player_hand
        if choice < 1 or choice > len(hand):
            return InputResult(error=f"Invalid choice {choice}. Enter 1-{len(hand)}.")

        card = hand[choice - 1]
        if not is_playable(card, state.top_card, state.wild_suit):
            return InputResult(error=f"You can't play the {card.rank.value} of {card.suit.value} now.")

        return InputResult(card_id=card.id)

    def get_suit(self, prompt: str = "> ") -> InputResult:
        """Get the wild suit after an eight.

        Accepts a 1-indexed choice or a suit name such as ``hearts`` or ``h``.
        """
        raw = self._read(prompt)
        if raw is None or raw in ("q", "quit", "exit"):
            return InputResult(quit=True)

        suits = list(Suit)
        if raw.isdigit():
            choice = int(raw)
            if 1 <= choice <= len(suits):
                return InputResult(suit=suits[choice - 1])
            return InputResult(error=f"Invalid choice {choice}. Enter 1-{len(suits)}.")

        for suit in suits:
            if raw and (raw == suit.value or raw == suit.value[0]):
                return InputResult(suit=suit)

        return InputResult(error=f"Unknown suit '{raw}'.")

    def get_yes_no(self, prompt: str) -> Optional[bool]:
        """Get yes/no response.

        Returns:
            True for yes, False for no, None for quit/cancel
        """
        raw = self._read(prompt)
        if raw in ("y", "yes"):
            return True
        if raw in ("n", "no"):
            return False
        return None
