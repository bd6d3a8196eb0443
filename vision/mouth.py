# vision/mouth.py
from typing import Optional

from vision.geometry import distance, landmark_at
from vision.landmarks import LandmarkSet

# Inner lip midpoints and inner mouth corners
UPPER_LIP = 13
LOWER_LIP = 14
LEFT_CORNER = 78
RIGHT_CORNER = 308


def mouth_open_ratio(face: Optional[LandmarkSet]) -> float:
    """
    Calculate the mouth-open ratio (lip gap over mouth width)

    Args:
        face: Face landmarks (may be None or incomplete)

    Returns:
        float: Ratio, 0.0 when a landmark is missing or the width is 0
    """
    upper = landmark_at(face, UPPER_LIP)
    lower = landmark_at(face, LOWER_LIP)
    left = landmark_at(face, LEFT_CORNER)
    right = landmark_at(face, RIGHT_CORNER)
    if upper is None or lower is None or left is None or right is None:
        return 0.0

    width = distance(left, right)
    if width <= 0:
        return 0.0
    return distance(upper, lower) / width
