"""Playtest session management."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from crazyeights.simulation.engine import (
    new_game, player_draw, player_play, select_wild_suit, opponent_turn,
)
from crazyeights.simulation.players import OpponentStrategy, SimpleOpponent
from crazyeights.simulation.state import GameState, GameStatus, Suit, Turn
from crazyeights.playtest.display import StateRenderer, MovePresenter
from crazyeights.playtest.input import HumanPlayer
from crazyeights.playtest.rules import RuleExplainer
from crazyeights.playtest.scheduler import TurnScheduler
from crazyeights.playtest.stuck import StuckDetector

logger = logging.getLogger(__name__)

TERMINAL_STATUSES = (GameStatus.WON, GameStatus.LOST, GameStatus.PAUSED)


@dataclass
class SessionConfig:
    """Configuration for playtest session."""

    opponent_delay: float = 1.5
    debug: bool = False
    seed: Optional[int] = None
    show_rules: bool = True
    max_skipped_turns: int = 4
    color: bool = False

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)


@dataclass
class PlaytestResult:
    """Outcome of a session's last game."""

    seed: int
    winner: str  # human, ai, stuck, quit
    moves: int
    games_played: int
    quit_early: bool = False
    stuck_reason: Optional[str] = None


class PlaytestSession:
    """Drives one human against the computer opponent.

    The session owns the current ``GameState`` and replaces it after every
    command. Whenever a transition hands the turn to the opponent, its move
    is scheduled on a ``TurnScheduler`` after ``opponent_delay`` seconds.
    """

    def __init__(
        self,
        config: SessionConfig,
        human_input: Optional[HumanPlayer] = None,
        strategy: Optional[OpponentStrategy] = None,
        timer_factory: Optional[Callable[..., threading.Timer]] = None,
    ):
        """Initialize session."""
        self.config = config
        self.seed = config.seed
        self.rng = random.Random(self.seed)

        # Components
        self.stuck_detector = StuckDetector(max_skipped_turns=config.max_skipped_turns)
        self.renderer = StateRenderer(color=config.color)
        self.presenter = MovePresenter()
        self.explainer = RuleExplainer()
        self.human_input = human_input or HumanPlayer()
        self.strategy = strategy or SimpleOpponent()
        self.scheduler = TurnScheduler(
            config.opponent_delay,
            timer_factory=timer_factory or threading.Timer,
        )

        # Session state
        self.move_history: list[dict] = []
        self.games_played = 0
        self.stuck_reason: Optional[str] = None
        self.state: Optional[GameState] = None
        self._game_id = 0
        self._lock = threading.Lock()

    def _record_move(self, actor: str, state: GameState) -> None:
        """Record move in history."""
        self.move_history.append({
            "game": self._game_id,
            "actor": actor,
            "action": state.last_action,
        })

    def start(self) -> GameState:
        """Deal a new game, dropping any pending opponent move."""
        self.scheduler.cancel()
        with self._lock:
            self._game_id += 1
            self.games_played += 1
            self.move_history = []
            self.stuck_detector.reset()
            self.stuck_reason = None
            self.state = new_game(self.rng)
            logger.info(f"Game {self._game_id} started")
            return self.state

    restart = start

    def _apply(
        self,
        actor: str,
        transition: Callable[[GameState], GameState],
        game_id: Optional[int] = None,
    ) -> GameState:
        """Apply ``transition`` to the current state and react to the result."""
        with self._lock:
            if self.state is None:
                raise RuntimeError("Session has not been started")
            if game_id is not None and game_id != self._game_id:
                logger.debug(f"Ignoring {actor} move for finished game {game_id}")
                return self.state

            before = self.state
            after = transition(before)
            if after is before:
                return before

            self.state = after
            self._record_move(actor, after)
            self.stuck_detector.record(before, after)

            reason = self.stuck_detector.check()
            if reason and after.status == GameStatus.PLAYING:
                logger.info(f"Game {self._game_id} paused: {reason}")
                self.stuck_reason = reason
                self.state = after.copy_with(status=GameStatus.PAUSED)
            elif after.status in TERMINAL_STATUSES:
                logger.info(f"Game {self._game_id} over: {after.status.value}")

            state = self.state
            current_game = self._game_id

        if state.status == GameStatus.PLAYING and state.turn == Turn.OPPONENT:
            self._schedule_opponent(current_game)
        return state

    def _schedule_opponent(self, game_id: int) -> None:
        self.scheduler.schedule(lambda: self._opponent_move(game_id))

    def _opponent_move(self, game_id: int) -> None:
        # The engine ignores this unless it is still the opponent's turn
        self._apply("ai", lambda s: opponent_turn(s, self.strategy), game_id=game_id)

    def human_draw(self) -> GameState:
        return self._apply("human", player_draw)

    def human_play(self, card_id: str) -> GameState:
        return self._apply("human", lambda s: player_play(s, card_id))

    def human_select_suit(self, suit: Suit) -> GameState:
        return self._apply("human", lambda s: select_wild_suit(s, suit))

    def wait_for_opponent(self) -> None:
        """Block until the opponent has moved."""
        with self._lock:
            state = self.state
            game_id = self._game_id
        if state is None or state.status != GameStatus.PLAYING or state.turn != Turn.OPPONENT:
            return
        if not self.scheduler.wait():
            # Nothing pending; a duplicate is harmless since the engine re-checks the turn
            self._schedule_opponent(game_id)
            self.scheduler.wait()

    def _winner(self, state: Optional[GameState]) -> str:
        if state is None:
            return "quit"
        return {
            GameStatus.WON: "human",
            GameStatus.LOST: "ai",
            GameStatus.PAUSED: "stuck",
        }.get(state.status, "quit")

    def run(self, output_fn: Callable[[str], None] = print) -> PlaytestResult:
        """Run the playtest session.

        Args:
            output_fn: Function to output text (default: print)

        Returns:
            PlaytestResult for the last game played
        """
        self.start()

        if self.config.show_rules:
            output_fn(self.explainer.explain_rules())
            output_fn("")
        output_fn(f"Seed: {self.seed} (use --seed {self.seed} to replay)")
        output_fn("")

        quit_early = False

        try:
            while True:
                state = self.state
                if state is None:
                    raise RuntimeError("Session has not been started")

                if state.status in TERMINAL_STATUSES:
                    output_fn("")
                    output_fn(self.renderer.render(state, self.config.debug))
                    output_fn("")
                    output_fn(self.explainer.explain_outcome(state.status))
                    again = self.human_input.get_yes_no("Play again? [y/n]: ")
                    if again:
                        self.start()
                        continue
                    break

                output_fn("")
                output_fn(self.renderer.render(state, self.config.debug))

                if state.turn == Turn.OPPONENT and state.status == GameStatus.PLAYING:
                    self.wait_for_opponent()
                    continue

                output_fn("")
                if state.status == GameStatus.SUIT_SELECTION:
                    output_fn(self.presenter.present_suits())
                    result = self.human_input.get_suit("Suit> ")
                else:
                    output_fn(self.presenter.present(state))
                    result = self.human_input.get_move(state)

                if result.quit:
                    quit_early = True
                    break
                if result.error:
                    output_fn(result.error)
                    continue
                if result.restart:
                    output_fn("Dealing a new game...")
                    self.restart()
                elif result.draw:
                    self.human_draw()
                elif result.card_id is not None:
                    self.human_play(result.card_id)
                elif result.suit is not None:
                    self.human_select_suit(result.suit)
        finally:
            self.scheduler.close()

        return PlaytestResult(
            seed=self.seed,
            winner="quit" if quit_early else self._winner(self.state),
            moves=len(self.move_history),
            games_played=self.games_played,
            quit_early=quit_early,
            stuck_reason=self.stuck_reason,
        )
