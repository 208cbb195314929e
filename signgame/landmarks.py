"""
Hand landmark detection using MediaPipe, and landmark overlay drawing.
"""
import cv2
import mediapipe as mp
import numpy as np
from typing import List

from .geometry import HAND_CONNECTIONS
from .types import HandPose


class HandsTracker:
    """Hand landmark tracker using MediaPipe Hands."""

    def __init__(self, max_num_hands: int = 1, min_detection_conf: float = 0.5,
                 min_tracking_conf: float = 0.5, model_complexity: int = 1):
        """
        Initialize the hands tracker.

        Args:
            max_num_hands: Maximum number of hands to detect
            min_detection_conf: Minimum confidence for hand detection
            min_tracking_conf: Minimum confidence for hand tracking
            model_complexity: MediaPipe landmark model complexity (0 or 1)
        """
        self.mp_hands = mp.solutions.hands
        self.hands = self.mp_hands.Hands(
            static_image_mode=False,
            max_num_hands=max_num_hands,
            model_complexity=model_complexity,
            min_detection_confidence=min_detection_conf,
            min_tracking_confidence=min_tracking_conf
        )

    def process(self, frame_bgr: np.ndarray) -> List[HandPose]:
        """
        Process a frame and return the landmarks of every detected hand.

        Args:
            frame_bgr: Input frame in BGR format

        Returns:
            One list of 21 (x, y) coordinates in [0..1] range per hand; empty if no hand detected
        """
        # Convert BGR to RGB for MediaPipe
        frame_rgb = cv2.cvtColor(frame_bgr, cv2.COLOR_BGR2RGB)

        results = self.hands.process(frame_rgb)

        poses: List[HandPose] = []
        if results.multi_hand_landmarks:
            for hand_landmarks in results.multi_hand_landmarks:
                poses.append([(lm.x, lm.y) for lm in hand_landmarks.landmark])

        return poses

    def close(self) -> None:
        """Release the MediaPipe graph."""
        self.hands.close()


def draw_landmarks(frame: np.ndarray, pose: HandPose) -> np.ndarray:
    """
    Draw landmark dots and the bone connections between them.

    Args:
        frame: Input frame
        pose: List of (x, y) coordinates in [0..1] range

    Returns:
        Frame with landmarks drawn
    """
    height, width = frame.shape[:2]
    points = [(int(x * width), int(y * height)) for x, y in pose]

    for start, end in HAND_CONNECTIONS:
        cv2.line(frame, points[start], points[end], (0, 255, 0), 2)

    for px, py in points:
        cv2.circle(frame, (px, py), 5, (0, 0, 255), -1)

    return frame
