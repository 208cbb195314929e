"""
Single-consumer event loop that feeds ticks, detections and user commands to
the game controller.
"""
import asyncio
import logging
from typing import Callable, Optional, Sequence, Union

from .classifier import classify
from .game import GameController
from .types import (
    NO_MATCH,
    CommandEvent,
    DetectionEvent,
    GamePhase,
    GameState,
    HandPose,
    TickEvent,
)

logger = logging.getLogger(__name__)

COMMANDS = ("start", "reset")

Event = Union[TickEvent, DetectionEvent, CommandEvent]


class _DetectionSlot:
    """Queue entry holding the newest detection posted since it was enqueued."""

    def __init__(self, event: DetectionEvent):
        self.event = event


class GameLoop:
    """
    Serializes the three event sources onto one GameController.

    Features:
    - One consumer task applies events in arrival order (single writer)
    - Ticker task posts a TickEvent every interval while the game is active
    - Back-to-back detections collapse to the newest one, never past a queued tick or command
    - stop() cancels both tasks; later submissions are ignored
    """

    def __init__(self, controller: GameController, tick_interval: float = 1.0,
                 classifier: Callable[[HandPose], str] = classify):
        """
        Initialize the loop.

        Args:
            controller: Controller that owns the game state
            tick_interval: Seconds between timer ticks
            classifier: Pose to letter function
        """
        self.controller = controller
        self.tick_interval = tick_interval
        self.classifier = classifier

        self._queue: "asyncio.Queue[Union[Event, _DetectionSlot]]" = asyncio.Queue()
        # Slot that is still the last queue entry; detections merge into it
        self._open_slot: Optional[_DetectionSlot] = None
        self._consumer_task: Optional[asyncio.Task] = None
        self._ticker_task: Optional[asyncio.Task] = None
        self._closed = False
        self.dropped_detections = 0

    @property
    def state(self) -> GameState:
        return self.controller.state

    @property
    def closed(self) -> bool:
        return self._closed

    def submit_pose(self, pose: Optional[HandPose]) -> str:
        """
        Per-frame callback. Classifies the pose and posts the result.

        Args:
            pose: Hand landmarks (None if no hand detected)

        Returns:
            The classified letter, NO_MATCH if nothing matched or no hand
        """
        if self._closed or pose is None:
            return NO_MATCH
        letter = self.classifier(pose)
        self.post(DetectionEvent(letter=letter))
        return letter

    def submit_frame(self, poses: Sequence[HandPose]) -> str:
        """Submit every pose found in one frame; the last one is kept."""
        letter = NO_MATCH
        for pose in poses:
            letter = self.submit_pose(pose)
        return letter

    def command(self, name: str) -> None:
        """Post a user command ("start" or "reset")."""
        if name not in COMMANDS:
            raise ValueError(f"Unknown command: {name!r}, expected one of {COMMANDS}")
        self.post(CommandEvent(command=name))

    def post(self, event: Event) -> None:
        """Enqueue an event for the consumer. Ignored once stopped."""
        if self._closed:
            return
        if isinstance(event, DetectionEvent):
            if self._open_slot is not None:
                self.dropped_detections += 1
                self._open_slot.event = event
                return
            self._open_slot = _DetectionSlot(event)
            self._queue.put_nowait(self._open_slot)
            return
        self._open_slot = None
        self._queue.put_nowait(event)

    def start_background(self) -> None:
        """Spawn the consumer and ticker tasks on the running loop."""
        if self._closed:
            raise RuntimeError("GameLoop was stopped and cannot be restarted")
        if self._consumer_task is None:
            self._consumer_task = asyncio.create_task(self._consume())
        self._restart_ticker()

    async def run(self) -> None:
        """Run until stop() is called."""
        self.start_background()
        try:
            await self._consumer_task
        except asyncio.CancelledError:
            if not self._closed:
                raise

    async def drain(self) -> None:
        """Wait until every queued event has been applied."""
        await self._queue.join()

    async def stop(self) -> None:
        """Cancel the ticker and consumer; no state changes after this returns."""
        if self._closed:
            return
        self._closed = True
        tasks = [t for t in (self._ticker_task, self._consumer_task) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._open_slot = None
        logger.info("🛑 Game loop stopped")

    def _restart_ticker(self) -> None:
        # Restarting keeps the first tick a full interval after start
        if self._ticker_task is not None:
            self._ticker_task.cancel()
        self._ticker_task = asyncio.create_task(self._tick_forever())

    async def _tick_forever(self) -> None:
        while not self._closed:
            await asyncio.sleep(self.tick_interval)
            if self.controller.state.phase is GamePhase.ACTIVE:
                self.post(TickEvent())

    async def _consume(self) -> None:
        while not self._closed:
            item = await self._queue.get()
            try:
                self._dispatch(item)
            finally:
                self._queue.task_done()

    def _dispatch(self, item: Union[Event, _DetectionSlot]) -> None:
        if self._closed:
            return
        if isinstance(item, _DetectionSlot):
            if item is self._open_slot:
                self._open_slot = None
            logger.debug(f"Detected: {item.event.letter or '-'}")
            self.controller.on_detected(item.event.letter)
        elif isinstance(item, TickEvent):
            self.controller.tick()
        elif isinstance(item, CommandEvent):
            if item.command == "start":
                was_idle = self.controller.state.phase is GamePhase.IDLE
                self.controller.start()
                if was_idle and self._ticker_task is not None:
                    self._restart_ticker()
            else:
                self.controller.reset()
