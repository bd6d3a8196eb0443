# vision/pose.py
import math
from typing import NamedTuple, Optional

import numpy as np

from vision.geometry import landmark_at
from vision.landmarks import LandmarkSet, Point

LEFT_EYE_OUTER = 33
RIGHT_EYE_OUTER = 263
NOSE_TIP = 1

# Nose offsets from the eye-line midpoint are small; scale them up
OFFSET_GAIN = 2.0


class HeadPose(NamedTuple):
    """
    Heuristic head orientation

    roll is the eye-line angle in radians; yaw and pitch are scaled nose
    offsets in normalized units. This is a proxy signal, not a calibrated
    3D pose.
    """
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0


def head_pose(face: Optional[LandmarkSet]) -> HeadPose:
    """
    Estimate head orientation from the outer eye corners and nose tip

    Args:
        face: Face landmarks (may be None or incomplete)

    Returns:
        HeadPose: All zeros if any of the three landmarks is missing
    """
    left_eye = landmark_at(face, LEFT_EYE_OUTER)
    right_eye = landmark_at(face, RIGHT_EYE_OUTER)
    nose = landmark_at(face, NOSE_TIP)
    if left_eye is None or right_eye is None or nose is None:
        return HeadPose()

    roll = math.atan2(right_eye.y - left_eye.y, right_eye.x - left_eye.x)

    mid_x = (left_eye.x + right_eye.x) / 2
    mid_y = (left_eye.y + right_eye.y) / 2
    yaw = (nose.x - mid_x) * OFFSET_GAIN
    pitch = (nose.y - mid_y) * OFFSET_GAIN

    return HeadPose(yaw=yaw, pitch=pitch, roll=roll)


def face_center(face: Optional[LandmarkSet]) -> Optional[Point]:
    """Mean x/y of the present landmarks, used as a reference point for head velocity"""
    if not face:
        return None
    points = [(p.x, p.y) for p in face if p is not None]
    if not points:
        return None
    coords = np.array(points, dtype=np.float64)
    cx, cy = coords.mean(axis=0)
    return Point(float(cx), float(cy))
