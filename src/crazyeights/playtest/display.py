"""Terminal display for game state and moves."""

from __future__ import annotations

import click

from crazyeights.simulation.state import Card, GameState, GameStatus, Suit, Turn
from crazyeights.simulation.movegen import is_playable, playable_cards


# Unicode card symbols
SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

RED_SUITS = (Suit.HEARTS, Suit.DIAMONDS)

FACE_DOWN = "[##]"


def suit_color(suit: Suit) -> str:
    """Terminal color name for a suit."""
    return "red" if suit in RED_SUITS else "black"


def format_card(card: Card, reveal: bool = False, color: bool = False) -> str:
    """Format card with unicode suit symbol.

    Face-down cards are hidden unless ``reveal`` is set. With ``color`` the
    text is wrapped in ANSI styling for its suit.
    """
    if not card.face_up and not reveal:
        return FACE_DOWN
    text = f"{card.rank.value}{SUIT_SYMBOLS[card.suit]}"
    if color:
        # Black suits keep the terminal default foreground
        fg = "red" if suit_color(card.suit) == "red" else None
        return click.style(text, fg=fg, bold=True)
    return text


def format_suit(suit: Suit) -> str:
    return f"{SUIT_SYMBOLS[suit]} {suit.value.capitalize()}"


class StateRenderer:
    """Renders visible game state to terminal."""

    def __init__(self, color: bool = False) -> None:
        self.color = color

    def render(self, state: GameState, debug: bool = False) -> str:
        """Render state from the human player's perspective."""
        lines: list[str] = []

        # Opponent
        count = len(state.opponent_hand)
        if debug:
            cards = ", ".join(format_card(c, reveal=True) for c in state.opponent_hand)
            lines.append(f"AI Opponent ({count}): [{cards}]")
        else:
            lines.append(f"AI Opponent ({count}): {' '.join(FACE_DOWN for _ in state.opponent_hand)}")
        lines.append("")

        # Center board
        deck_str = f"{len(state.deck)} cards" if state.deck else "Deck empty"
        lines.append(f"Deck: {deck_str}")
        if state.top_card is not None:
            top = format_card(state.top_card, reveal=True, color=self.color)
            if state.wild_suit is not None:
                lines.append(f"Discard pile: {top}  (suit is {format_suit(state.wild_suit)})")
            else:
                lines.append(f"Discard pile: {top}")
        lines.append("")

        if state.last_action:
            lines.append(state.last_action)
        if state.status == GameStatus.PLAYING and state.hint:
            lines.append(f"Hint: {state.hint}")
        lines.append("")

        # Player's hand
        hand = state.player_hand
        if hand:
            cards_str = "  ".join(
                f"[{i+1}] {format_card(card, reveal=True, color=self.color)}"
                + ("*" if is_playable(card, state.top_card, state.wild_suit) else "")
                for i, card in enumerate(hand)
            )
            lines.append(f"Your Hand ({len(hand)}): {cards_str}")
        else:
            lines.append("Your Hand (0): (empty)")

        return "\n".join(lines)


class MovePresenter:
    """Presents the human player's options."""

    def present(self, state: GameState) -> str:
        """Present moves in human-readable format."""
        if state.status == GameStatus.SUIT_SELECTION:
            return self.present_suits()
        if state.status != GameStatus.PLAYING or state.turn != Turn.PLAYER:
            return "Waiting for the AI..."

        lines: list[str] = []
        playable = {c.id for c in playable_cards(state.player_hand, state)}
        options = [
            f"[{i + 1}] {format_card(card, reveal=True)}"
            for i, card in enumerate(state.player_hand)
            if card.id in playable
        ]
        if options:
            lines.append("Play: " + "  ".join(options))
        else:
            lines.append("No playable cards.")
        lines.append("[d]raw  [r]estart  [q]uit")
        lines.append("")
        lines.append("Enter choice:")

        return "\n".join(lines)

    def present_suits(self) -> str:
        """Present the wild suit choice."""
        options = [f"[{i + 1}] {format_suit(suit)}" for i, suit in enumerate(Suit)]
        return "Choose a suit: " + "  ".join(options)
