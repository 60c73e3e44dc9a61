"""Crazy Eights rules engine.

Every operation is a pure function from one ``GameState`` to the next.
Commands that are not valid for the current status, turn or hand return
the input state unchanged.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from crazyeights.simulation.deck import build_shuffled_deck
from crazyeights.simulation.movegen import check_win, is_playable, playable_cards
from crazyeights.simulation.players import OpponentStrategy, SimpleOpponent
from crazyeights.simulation.state import Card, GameState, GameStatus, Suit, Turn

logger = logging.getLogger(__name__)

HAND_SIZE = 8

START_MESSAGE = "Game started! Your turn."
START_HINT = "Match the suit or rank of the top card."

__all__ = [
    "HAND_SIZE",
    "new_game",
    "player_draw",
    "player_play",
    "select_wild_suit",
    "opponent_turn",
    "compute_hint",
    "check_win",
    "is_playable",
]


def new_game(rng: Optional[random.Random] = None) -> GameState:
    """Deal a fresh game.

    The player gets the first eight cards of the shuffle face-up, the
    opponent the next eight face-down. The discard pile is seeded from the
    top of the remaining deck; eights are tucked under the deck until a
    non-eight turns up.
    """
    deck = list(build_shuffled_deck(rng))
    player_hand = tuple(c.flipped(True) for c in deck[:HAND_SIZE])
    opponent_hand = tuple(c.flipped(False) for c in deck[HAND_SIZE:2 * HAND_SIZE])
    deck = deck[2 * HAND_SIZE:]

    first = deck.pop()
    while first.is_eight:
        logger.debug(f"Seed card {first} is an eight, returning it to the bottom")
        deck.insert(0, first)
        first = deck.pop()

    state = GameState(
        deck=tuple(deck),
        player_hand=player_hand,
        opponent_hand=opponent_hand,
        discard=(first.flipped(True),),
        turn=Turn.PLAYER,
        status=GameStatus.PLAYING,
        wild_suit=None,
        last_action=START_MESSAGE,
        hint=START_HINT,
    )
    logger.debug(f"New game dealt, discard starts with {first}")
    return state


def _can_act(state: GameState, turn: Turn, command: str) -> bool:
    if state.status != GameStatus.PLAYING or state.turn != turn:
        logger.debug(f"Ignoring {command}: status={state.status.value}, turn={state.turn.value}")
        return False
    return True


def _settle(state: GameState) -> GameState:
    """Apply the win check, then refresh the hint if play continues."""
    outcome = check_win(state)
    if outcome is not None:
        logger.debug(f"Game over: {outcome.value}")
        return state.copy_with(status=outcome)
    if state.status == GameStatus.PLAYING:
        return state.copy_with(hint=compute_hint(state))
    return state


def player_draw(state: GameState) -> GameState:
    """Draw one card for the player and pass the turn.

    An empty deck still ends the player's turn.
    """
    if not _can_act(state, Turn.PLAYER, "player draw"):
        return state

    if not state.deck:
        return _settle(state.copy_with(
            turn=Turn.OPPONENT,
            last_action="Deck empty! Turn skipped.",
        ))

    drawn = state.deck[-1].flipped(True)
    return _settle(state.copy_with(
        deck=state.deck[:-1],
        player_hand=state.player_hand + (drawn,),
        turn=Turn.OPPONENT,
        last_action="You drew a card.",
    ))


def player_play(state: GameState, card_id: str) -> GameState:
    """Play the card with ``card_id`` from the player's hand.

    Playing an eight moves the game into suit selection and keeps the turn
    with the player until ``select_wild_suit`` resolves it.
    """
    if not _can_act(state, Turn.PLAYER, "player play"):
        return state

    card = next((c for c in state.player_hand if c.id == card_id), None)
    if card is None:
        logger.debug(f"Ignoring player play: card {card_id} not in hand")
        return state
    if not is_playable(card, state.top_card, state.wild_suit):
        logger.debug(f"Ignoring player play: {card} is not playable")
        return state

    new_hand = tuple(c for c in state.player_hand if c.id != card_id)
    new_discard = state.discard + (card.flipped(True),)

    if card.is_eight:
        return state.copy_with(
            player_hand=new_hand,
            discard=new_discard,
            status=GameStatus.SUIT_SELECTION,
        )

    return _settle(state.copy_with(
        player_hand=new_hand,
        discard=new_discard,
        wild_suit=None,
        turn=Turn.OPPONENT,
        last_action=f"You played {card.rank.value} of {card.suit.value}.",
    ))


def select_wild_suit(state: GameState, suit: Suit) -> GameState:
    """Resolve a pending eight by naming the suit to follow."""
    if state.status != GameStatus.SUIT_SELECTION:
        logger.debug(f"Ignoring suit selection: status={state.status.value}")
        return state

    # The win check here catches an eight played as the last card
    return _settle(state.copy_with(
        wild_suit=suit,
        status=GameStatus.PLAYING,
        turn=Turn.OPPONENT,
        last_action=f"You set the suit to {suit.value}.",
    ))


def opponent_turn(
    state: GameState,
    strategy: Optional[OpponentStrategy] = None,
) -> GameState:
    """Let the computer opponent play a card or draw.

    Safe to call from a stale timer: it does nothing unless the game is in
    play and the opponent holds the turn.
    """
    if not _can_act(state, Turn.OPPONENT, "opponent turn"):
        return state
    if strategy is None:
        strategy = SimpleOpponent()

    card = strategy.choose_card(state)

    if card is None:
        if not state.deck:
            return _settle(state.copy_with(
                turn=Turn.PLAYER,
                last_action="AI deck empty! Turn skipped.",
            ))
        drawn = state.deck[-1].flipped(False)
        return _settle(state.copy_with(
            deck=state.deck[:-1],
            opponent_hand=state.opponent_hand + (drawn,),
            turn=Turn.PLAYER,
            last_action="AI drew a card.",
        ))

    new_hand = tuple(c for c in state.opponent_hand if c.id != card.id)

    if card.is_eight:
        wild_suit: Optional[Suit] = strategy.choose_suit(new_hand)
        action = f"AI played an 8 and set suit to {wild_suit.value}."
    else:
        wild_suit = None
        action = f"AI played {card.rank.value} of {card.suit.value}."
    logger.debug(action)

    return _settle(state.copy_with(
        opponent_hand=new_hand,
        discard=state.discard + (card.flipped(True),),
        wild_suit=wild_suit,
        turn=Turn.PLAYER,
        last_action=action,
    ))


def compute_hint(state: GameState) -> str:
    """Suggest the player's next move."""
    if state.turn == Turn.OPPONENT:
        return "AI is thinking..."

    candidates = playable_cards(state.player_hand, state)
    if not candidates:
        return "No playable cards. Draw from the deck!"

    card: Card = candidates[0]
    if card.is_eight:
        return "You have a Wild 8! You can play it anytime."
    return f"You can play the {card.rank.value} of {card.suit.value}."
