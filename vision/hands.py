# vision/hands.py
# Hand features and the thumbs-up gesture over MediaPipe hand landmarks.

from typing import Optional

from vision.geometry import distance, landmark_at
from vision.landmarks import LandmarkSet

WRIST = 0
THUMB_TIP = 4
INDEX_TIP = 8

THUMBS_UP_MIN_PINCH = 0.1


def pinch_distance(hand: Optional[LandmarkSet]) -> float:
    """
    Distance between thumb tip and index fingertip

    Larger means the fingers are farther apart.

    Args:
        hand: Hand landmarks (may be None or incomplete)

    Returns:
        float: Normalized distance, 0.0 if either tip is missing
    """
    thumb = landmark_at(hand, THUMB_TIP)
    index = landmark_at(hand, INDEX_TIP)
    if thumb is None or index is None:
        return 0.0
    return distance(thumb, index)


def is_thumbs_up(hand: Optional[LandmarkSet], min_pinch: float = THUMBS_UP_MIN_PINCH) -> bool:
    """
    Thumbs-up heuristic: thumb tip above the wrist with thumb and index spread

    Image y grows downward, so "above" means a smaller y.

    Args:
        hand: Hand landmarks (may be None or incomplete)
        min_pinch: Thumb-index distance that must be exceeded

    Returns:
        bool: False when thumb tip, index tip or wrist is missing
    """
    thumb = landmark_at(hand, THUMB_TIP)
    index = landmark_at(hand, INDEX_TIP)
    wrist = landmark_at(hand, WRIST)
    if thumb is None or index is None or wrist is None:
        return False
    return thumb.y < wrist.y and pinch_distance(hand) > min_pinch
