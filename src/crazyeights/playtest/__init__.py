"""Terminal playtesting against the computer opponent."""

from crazyeights.playtest.stuck import StuckDetector
from crazyeights.playtest.display import StateRenderer, MovePresenter, format_card
from crazyeights.playtest.rules import RuleExplainer
from crazyeights.playtest.input import HumanPlayer, InputResult
from crazyeights.playtest.scheduler import TurnScheduler
from crazyeights.playtest.session import PlaytestSession, SessionConfig, PlaytestResult

__all__ = [
    "StuckDetector",
    "StateRenderer",
    "MovePresenter",
    "format_card",
    "RuleExplainer",
    "HumanPlayer",
    "InputResult",
    "TurnScheduler",
    "PlaytestSession",
    "SessionConfig",
    "PlaytestResult",
]
