"""
Type definitions for the sign language game.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional, Protocol, Tuple, runtime_checkable


# Normalized (x, y) point in [0..1] frame coordinates
Landmark = Tuple[float, float]

# 21 landmarks in MediaPipe Hands order
HandPose = List[Landmark]

# Result of classifying a pose when no rule matches
NO_MATCH = ""

Command = Literal["start", "reset"]


class GamePhase(Enum):
    """Phase of a single game session."""
    IDLE = "idle"
    ACTIVE = "active"
    OVER = "over"


@dataclass(frozen=True)
class GameState:
    """Snapshot of the game shown to the player."""
    phase: GamePhase
    target_letter: Optional[str]  # set only while ACTIVE
    score: int
    time_left: int  # seconds
    detected_letter: str = NO_MATCH  # last classified letter, for display


@dataclass(frozen=True)
class TickEvent:
    """One second of wall-clock time has elapsed."""


@dataclass(frozen=True)
class DetectionEvent:
    """A frame's pose was classified as `letter` (may be NO_MATCH)."""
    letter: str


@dataclass(frozen=True)
class CommandEvent:
    """User-initiated start or reset."""
    command: Command


@runtime_checkable
class GameObserverProto(Protocol):
    """Abstract protocol for sinks that display game state."""

    def on_state(self, state: GameState) -> None:
        """Receive the new state after a transition."""
        ...
