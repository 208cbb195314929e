"""
Hand pose geometry shared by the classifier and the overlay renderer.
"""
import math
from typing import Dict, List, Tuple

from .types import HandPose, Landmark


NUM_LANDMARKS = 21

# Fingertip landmark indices (MediaPipe Hands convention)
THUMB_TIP = 4
INDEX_TIP = 8
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20

FINGERTIP_INDICES: Dict[str, int] = {
    "thumb": THUMB_TIP,
    "index": INDEX_TIP,
    "middle": MIDDLE_TIP,
    "ring": RING_TIP,
    "pinky": PINKY_TIP,
}

# Bone connections between landmarks, same topology as mp.solutions.hands.HAND_CONNECTIONS
HAND_CONNECTIONS: List[Tuple[int, int]] = [
    (0, 1), (1, 2), (2, 3), (3, 4),
    (0, 5), (5, 6), (6, 7), (7, 8),
    (5, 9), (9, 10), (10, 11), (11, 12),
    (9, 13), (13, 14), (14, 15), (15, 16),
    (13, 17), (0, 17), (17, 18), (18, 19), (19, 20),
]


def distance(a: Landmark, b: Landmark) -> float:
    """Euclidean distance between two points in normalized coordinates."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def fingertips(pose: HandPose) -> Dict[str, Landmark]:
    """
    Pick the five fingertip landmarks out of a pose.

    Args:
        pose: List of 21 hand landmarks

    Returns:
        Mapping of finger name (thumb/index/middle/ring/pinky) to its tip point
    """
    return {name: pose[idx] for name, idx in FINGERTIP_INDICES.items()}


def validate_pose(pose: HandPose) -> HandPose:
    """
    Check that a pose is well formed before handing it to the classifier.

    Raises:
        ValueError: If the pose does not hold exactly 21 (x, y) points
    """
    if len(pose) != NUM_LANDMARKS:
        raise ValueError(f"Expected {NUM_LANDMARKS} landmarks, got {len(pose)}")
    for i, point in enumerate(pose):
        if len(point) < 2:
            raise ValueError(f"Landmark {i} is not an (x, y) point: {point!r}")
    return pose
