"""
Mock observer implementation for headless runs and tests.
"""
import logging
from typing import List

from .types import GameState

logger = logging.getLogger(__name__)


class MockObserver:
    """Mock observer that logs and records game states instead of drawing them."""

    def __init__(self):
        """Initialize the mock observer."""
        self.states: List[GameState] = []
        self.update_count = 0

    def on_state(self, state: GameState) -> None:
        """Record and log the new state."""
        self.update_count += 1
        self.states.append(state)
        logger.info(
            f"[MockObserver] phase={state.phase.value} target={state.target_letter} "
            f"score={state.score} time_left={state.time_left} (update #{self.update_count})"
        )

    @property
    def last(self) -> GameState:
        return self.states[-1]

    def reset_counters(self) -> None:
        """Reset recorded states for testing."""
        self.states.clear()
        self.update_count = 0
