"""
Sign Language Game

Reads webcam frames, detects hand landmarks using MediaPipe, classifies the
hand shape as a sign letter and scores it against a target letter before a
countdown runs out.
"""

__version__ = "0.1.0"

from .types import NO_MATCH, GamePhase, GameState, HandPose, GameObserverProto
from .config import load_config, Cfg
from .classifier import LETTERS, RULES, classify, matching_letters
from .game import GameController, PRACTICE_LETTERS, ROUND_SECONDS
from .game_loop import GameLoop
from .observer_mock import MockObserver

__all__ = [
    "NO_MATCH",
    "GamePhase",
    "GameState",
    "HandPose",
    "GameObserverProto",
    "load_config",
    "Cfg",
    "LETTERS",
    "RULES",
    "classify",
    "matching_letters",
    "GameController",
    "PRACTICE_LETTERS",
    "ROUND_SECONDS",
    "GameLoop",
    "MockObserver",
]
