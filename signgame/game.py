"""
Game state machine: countdown timer, scoring and target letter rotation.

The transitions are pure functions over GameState. GameController owns the
current state and applies them on behalf of the event loop.
"""
import logging
import random
from dataclasses import replace
from typing import List, Optional, Sequence

from .types import NO_MATCH, GamePhase, GameObserverProto, GameState

logger = logging.getLogger(__name__)


ROUND_SECONDS = 10
PRACTICE_LETTERS = "ABDEIH"


def initial_state(round_seconds: int = ROUND_SECONDS) -> GameState:
    """State before the first start() or after reset()."""
    return GameState(
        phase=GamePhase.IDLE,
        target_letter=None,
        score=0,
        time_left=round_seconds,
    )


def draw_target(rng: random.Random, letters: Sequence[str]) -> str:
    """Uniform, independent draw; may repeat the previous target."""
    return rng.choice(letters)


def start(state: GameState, rng: random.Random, letters: Sequence[str] = PRACTICE_LETTERS,
          round_seconds: int = ROUND_SECONDS) -> GameState:
    """IDLE -> ACTIVE with a fresh target and a full timer."""
    if state.phase is not GamePhase.IDLE:
        return state
    return GameState(
        phase=GamePhase.ACTIVE,
        target_letter=draw_target(rng, letters),
        score=0,
        time_left=round_seconds,
    )


def tick(state: GameState) -> GameState:
    """One second passes. Reaching zero ends the game."""
    if state.phase is not GamePhase.ACTIVE:
        return state
    time_left = max(state.time_left - 1, 0)
    if time_left == 0:
        return replace(state, phase=GamePhase.OVER, target_letter=None, time_left=0)
    return replace(state, time_left=time_left)


def on_detected(state: GameState, letter: str, rng: random.Random,
                letters: Sequence[str] = PRACTICE_LETTERS,
                round_seconds: int = ROUND_SECONDS) -> GameState:
    """
    Apply one classified frame.

    A detection equal to the target scores a point, draws a new target and
    refills the timer. Every frame the target sign is seen scores again.

    Args:
        state: Current state
        letter: Classified letter for this frame (NO_MATCH if none)
        rng: Random source for the next target
        letters: Active letter set targets are drawn from
        round_seconds: Timer value after a match

    Returns:
        The next state
    """
    if state.phase is not GamePhase.ACTIVE:
        return state
    if letter == NO_MATCH or letter != state.target_letter:
        if letter == state.detected_letter:
            return state
        return replace(state, detected_letter=letter)
    return replace(
        state,
        target_letter=draw_target(rng, letters),
        score=state.score + 1,
        time_left=round_seconds,
        detected_letter=letter,
    )


def reset(state: GameState, round_seconds: int = ROUND_SECONDS) -> GameState:
    """Back to IDLE from any phase, ready for a new start()."""
    return initial_state(round_seconds)


class GameController:
    """
    Owns the current GameState and applies transitions to it.

    Observers are notified after every transition that changed the state.
    """

    def __init__(self, letters: Sequence[str] = PRACTICE_LETTERS, round_seconds: int = ROUND_SECONDS,
                 rng: Optional[random.Random] = None):
        """
        Initialize the controller.

        Args:
            letters: Active letter set the game draws targets from
            round_seconds: Countdown length after start and after each match
            rng: Random source; a fresh random.Random() if None
        """
        if not letters:
            raise ValueError("letters must not be empty")
        self.letters = tuple(letters)
        self.round_seconds = round_seconds
        self.rng = rng if rng is not None else random.Random()
        self.state = initial_state(round_seconds)
        self._observers: List[GameObserverProto] = []

    def subscribe(self, observer: GameObserverProto) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: GameObserverProto) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def start(self) -> GameState:
        new_state = start(self.state, self.rng, self.letters, self.round_seconds)
        if new_state is not self.state:
            logger.info(f"🎮 Game started, show the sign for {new_state.target_letter}")
        return self._apply(new_state)

    def tick(self) -> GameState:
        new_state = tick(self.state)
        if new_state is not self.state:
            logger.debug(f"Tick: {new_state.time_left}s left")
            if new_state.phase is GamePhase.OVER:
                logger.info(f"⏰ Time's up! Game over with score {new_state.score}")
        return self._apply(new_state)

    def on_detected(self, letter: str) -> GameState:
        new_state = on_detected(self.state, letter, self.rng, self.letters, self.round_seconds)
        if new_state.score != self.state.score:
            logger.info(f"✅ Matched {letter}! Score {new_state.score}, next letter {new_state.target_letter}")
        return self._apply(new_state)

    def reset(self) -> GameState:
        new_state = reset(self.state, self.round_seconds)
        if new_state != self.state:
            logger.info("🔄 Game reset")
        return self._apply(new_state)

    def force_target(self, letter: str) -> GameState:
        """Pin the current target, for tests and demos. Only valid while ACTIVE."""
        if self.state.phase is not GamePhase.ACTIVE:
            raise ValueError("Target can only be set while the game is active")
        return self._apply(replace(self.state, target_letter=letter))

    def _apply(self, new_state: GameState) -> GameState:
        if new_state != self.state:
            self.state = new_state
            for observer in list(self._observers):
                observer.on_state(new_state)
        return self.state
