"""
Main application for the sign language game.
"""
import asyncio
import logging
from typing import Optional

import cv2

from .config import load_config
from .game import GameController
from .game_loop import GameLoop
from .landmarks import HandsTracker, draw_landmarks
from .observer_mock import MockObserver
from .types import GamePhase

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)
GREEN = (0, 200, 0)
RED = (0, 0, 255)
BLUE = (255, 120, 0)


class SignGameApp:
    """Main application class: camera, hand tracking and the game overlay."""

    def __init__(self, config_path: Optional[str] = None, headless_observer: bool = False):
        """Initialize the application with configuration."""
        self.config = load_config(config_path)
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence,
            model_complexity=self.config.mediapipe.model_complexity
        )

        self.controller = GameController(
            letters=self.config.game.practice_letters,
            round_seconds=self.config.game.round_seconds
        )
        if headless_observer:
            self.controller.subscribe(MockObserver())

        self.game_loop = GameLoop(self.controller, tick_interval=self.config.game.tick_interval_s)

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop."""
        logger.info(f"Starting {self.config.display.window_name}")
        logger.info(f"🎯 Practice letters: {', '.join(self.config.game.practice_letters)}")
        logger.info("Press 's' to start, 'r' to reset, 'q' to quit")

        self.game_loop.start_background()
        try:
            while True:
                ret, frame = self.cap.read()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    break

                poses = self.tracker.process(frame)

                # Only classify while playing; a frame without a hand advances nothing
                if poses and self.controller.state.phase is GamePhase.ACTIVE:
                    self.game_loop.submit_frame(poses)

                if poses and self.config.display.show_landmarks:
                    for pose in poses:
                        frame = draw_landmarks(frame, pose)

                self._draw_overlay(frame)
                cv2.imshow(self.config.display.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                if key == ord('s'):
                    self.game_loop.command("start")
                elif key == ord('r'):
                    self.game_loop.command("reset")

                # Let the game loop consume queued events
                await asyncio.sleep(0)
        finally:
            await self.close()

    def _draw_overlay(self, frame) -> None:
        state = self.controller.state
        height = frame.shape[0]

        cv2.putText(frame, f"Detected: {state.detected_letter or '-'}", (10, 25),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, BLUE, 2)

        if state.phase is GamePhase.ACTIVE:
            cv2.putText(frame, f"Show: {state.target_letter}", (10, 55),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.8, GREEN, 2)
        elif state.phase is GamePhase.OVER:
            cv2.putText(frame, "Time's up! Game Over.", (10, 55),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, RED, 2)
        else:
            cv2.putText(frame, "Press 's' to play", (10, 55),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, WHITE, 2)

        cv2.putText(frame, f"Score: {state.score}", (10, height - 35),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, WHITE, 1)
        cv2.putText(frame, f"Time left: {state.time_left}s", (10, height - 15),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, RED, 1)

    async def close(self):
        """Stop the game loop and release the camera."""
        await self.game_loop.stop()
        self.tracker.close()
        if self.cap.isOpened():
            self.cap.release()
        cv2.destroyAllWindows()


async def main():
    """Entry point for the application."""
    import sys

    logging.basicConfig(level=logging.INFO)

    # --headless-log mirrors every state change to the log
    headless_observer = "--headless-log" in sys.argv

    try:
        app = SignGameApp(headless_observer=headless_observer)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except (RuntimeError, FileNotFoundError, ValueError) as e:
        logger.error(f"❌ Error: {e}")
        sys.exit(1)


def cli():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
