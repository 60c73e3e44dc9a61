"""Tests for PlaytestSession."""

import pytest
from crazyeights.playtest.input import HumanPlayer
from crazyeights.playtest.session import PlaytestSession, SessionConfig
from crazyeights.simulation.state import Card, GameState, GameStatus, Rank, Suit, Turn


class FakeTimer:
    """Timer that fires only when joined or fired explicitly."""

    def __init__(self, interval, function, args=()):
        self.function = function
        self.args = args
        self.daemon = False
        self.alive = False

    def start(self):
        self.alive = True

    def cancel(self):
        self.alive = False

    def is_alive(self):
        return self.alive

    def join(self, timeout=None):
        self.fire()

    def fire(self):
        if self.alive:
            self.alive = False
            self.function(*self.args)


def make_card(rank: str, suit: str) -> Card:
    """Helper to create cards."""
    return Card(id=f"{rank}-{suit}", rank=Rank(rank), suit=Suit(suit), face_up=True)


def make_session(**config) -> PlaytestSession:
    config.setdefault("seed", 12345)
    return PlaytestSession(SessionConfig(**config), timer_factory=FakeTimer)


def fixed_state(player, opponent, deck=(), top=("K", "hearts")) -> GameState:
    return GameState(
        deck=tuple(make_card(*c) for c in deck),
        player_hand=tuple(make_card(*c) for c in player),
        opponent_hand=tuple(make_card(*c) for c in opponent),
        discard=(make_card(*top),),
    )


class TestSessionConfig:
    """Tests for SessionConfig."""

    def test_default_config(self):
        """Default config has sensible values."""
        config = SessionConfig()

        assert config.opponent_delay == 1.5
        assert config.debug is False
        assert config.show_rules is True
        assert config.max_skipped_turns == 4

    def test_seed_generation(self):
        """Generates seed if not provided."""
        assert SessionConfig().seed is not None

    def test_explicit_seed_kept(self):
        assert SessionConfig(seed=7).seed == 7


class TestPlaytestSession:
    """Tests for PlaytestSession."""

    def test_initialization(self):
        """Session initializes without dealing."""
        session = make_session()

        assert session.seed == 12345
        assert session.state is None
        assert session.move_history == []

    def test_start_deals(self):
        """Start deals a fresh game."""
        session = make_session()

        state = session.start()

        assert state is session.state
        assert len(state.player_hand) == 8
        assert session.games_played == 1

    def test_seeded_sessions_match(self):
        """Same seed deals the same first game."""
        assert make_session().start() == make_session().start()

    def test_commands_before_start_raise(self):
        """Commands need a started game."""
        with pytest.raises(RuntimeError):
            make_session().human_draw()

    def test_draw_schedules_opponent(self):
        """Handing over the turn schedules the opponent move."""
        session = make_session()
        session.start()

        session.human_draw()
        assert session.state.turn == Turn.OPPONENT
        assert session.scheduler.pending

        session.wait_for_opponent()

        assert session.state.turn == Turn.PLAYER
        assert [m["actor"] for m in session.move_history] == ["human", "ai"]

    def test_invalid_play_not_recorded(self):
        """Ignored commands leave no trace."""
        session = make_session()
        before = session.start()

        state = session.human_play("missing")

        assert state is before
        assert session.move_history == []
        assert not session.scheduler.pending

    def test_eight_then_suit(self):
        """Eight waits for the suit before the opponent moves."""
        session = make_session()
        session.start()
        session.state = fixed_state([("8", "clubs"), ("2", "spades")], [("3", "clubs"), ("4", "hearts")])

        session.human_play("8-clubs")
        assert session.state.status == GameStatus.SUIT_SELECTION
        assert not session.scheduler.pending

        session.human_select_suit(Suit.CLUBS)
        assert session.scheduler.pending

        session.wait_for_opponent()
        assert session.state.discard[-1].id == "3-clubs"

    def test_restart_drops_pending_opponent(self):
        """A timer from the previous game does nothing."""
        session = make_session()
        session.start()
        session.human_draw()
        timer = session.scheduler._timer

        fresh = session.restart()
        timer.function(*timer.args)

        assert session.state is fresh
        assert session.games_played == 2
        assert session.move_history == []

    def test_old_game_move_ignored(self):
        """Opponent moves tagged with an old game id are dropped."""
        session = make_session()
        session.start()
        session.human_draw()
        old_game = session._game_id

        session.restart()
        session.state = session.state.copy_with(turn=Turn.OPPONENT)
        before = session.state

        session._opponent_move(old_game)

        assert session.state is before

    def test_wait_without_pending_timer(self):
        """Waiting on the opponent's turn with nothing scheduled schedules it."""
        session = make_session()
        session.start()
        session.state = session.state.copy_with(turn=Turn.OPPONENT)

        session.wait_for_opponent()

        assert session.state.turn == Turn.PLAYER

    def test_drawing_past_a_play_never_pauses(self):
        """Opponent skips do not pile up while the player holds a legal card."""
        session = make_session(max_skipped_turns=4)
        session.start()
        session.state = fixed_state([("5", "hearts"), ("2", "clubs")], [("3", "clubs"), ("4", "spades")])

        for _ in range(4):
            session.human_draw()
            session.wait_for_opponent()

        assert session.state.status == GameStatus.PLAYING
        assert session.stuck_reason is None

    def test_stuck_game_paused(self):
        """Repeated forced skips pause the game."""
        session = make_session(max_skipped_turns=4)
        session.start()
        session.state = fixed_state([("2", "clubs")], [("3", "spades")])

        for _ in range(2):
            session.human_draw()
            session.wait_for_opponent()

        assert session.state.status == GameStatus.PAUSED
        assert session.stuck_reason is not None


class TestRun:
    """Tests for the interactive loop."""

    def test_quit_immediately(self):
        """Quitting ends the session."""
        session = make_session()
        session.human_input = HumanPlayer(input_fn=lambda prompt: "q")
        lines: list[str] = []

        result = session.run(output_fn=lines.append)

        assert result.quit_early
        assert result.winner == "quit"
        assert result.seed == 12345
        assert any("Crazy Eights" in line for line in lines)
        assert any("--seed 12345" in line for line in lines)

    def test_no_rules(self):
        """Rules can be skipped."""
        session = make_session(show_rules=False)
        session.human_input = HumanPlayer(input_fn=lambda prompt: "q")
        lines: list[str] = []

        session.run(output_fn=lines.append)

        assert not any("8s are Wild" in line for line in lines)

    def test_seed_shown_without_rules(self):
        """The replay seed is printed even when rules are hidden."""
        session = make_session(show_rules=False)
        session.human_input = HumanPlayer(input_fn=lambda prompt: "q")
        lines: list[str] = []

        session.run(output_fn=lines.append)

        assert any("--seed 12345" in line for line in lines)

    def test_run_without_state_raises(self):
        """The loop refuses to run without a dealt game."""
        session = make_session(show_rules=False)
        session.start = lambda: None

        with pytest.raises(RuntimeError):
            session.run(output_fn=lambda line: None)

    def test_errors_are_shown(self):
        """Bad input is reported and the prompt repeats."""
        session = make_session(show_rules=False)
        replies = iter(["xyz", "q"])
        session.human_input = HumanPlayer(input_fn=lambda prompt: next(replies))
        lines: list[str] = []

        session.run(output_fn=lines.append)

        assert any("Invalid input" in line for line in lines)

    def test_restart_command(self):
        """Restart deals another game."""
        session = make_session(show_rules=False)
        replies = iter(["r", "q"])
        session.human_input = HumanPlayer(input_fn=lambda prompt: next(replies))

        result = session.run(output_fn=lambda line: None)

        assert result.games_played == 2

    def test_scheduler_closed_after_run(self):
        """Run closes the scheduler."""
        session = make_session()
        session.human_input = HumanPlayer(input_fn=lambda prompt: "q")

        session.run(output_fn=lambda line: None)

        with pytest.raises(RuntimeError):
            session.scheduler.schedule(lambda: None)
