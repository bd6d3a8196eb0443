# vision/geometry.py
# Distance helpers over normalized landmarks.

from math import hypot
from typing import Optional, Sequence


def distance(a, b) -> float:
    """Euclidean distance in normalized x/y space (z is ignored)."""
    return hypot(a.x - b.x, a.y - b.y)


def landmark_at(landmarks: Optional[Sequence], index: int):
    """
    Presence-checked landmark lookup

    Args:
        landmarks: Landmark sequence (may be None or shorter than expected)
        index: Detector landmark index

    Returns:
        The landmark, or None if the set is missing, too short or holds None
    """
    if landmarks is None or index < 0 or index >= len(landmarks):
        return None
    return landmarks[index]
