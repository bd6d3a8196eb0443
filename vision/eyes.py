# vision/eyes.py
# Eye openness from MediaPipe Face Mesh landmarks.

from typing import Optional

from vision.geometry import distance, landmark_at
from vision.landmarks import BlendShapeScores, LandmarkSet

# Eyelid pair and eye corners per side (MediaPipe face mesh indices)
LEFT_EYE = {'top': 159, 'bottom': 145, 'outer': 33, 'inner': 133}
RIGHT_EYE = {'top': 386, 'bottom': 374, 'outer': 263, 'inner': 362}

EYE_INDICES = {'left': LEFT_EYE, 'right': RIGHT_EYE}

# Blend shape categories reported by the face landmarker
BLINK_LEFT = 'eyeBlinkLeft'
BLINK_RIGHT = 'eyeBlinkRight'


def eye_aspect_ratio(face: Optional[LandmarkSet], side: str) -> float:
    """
    Calculate the Eye Aspect Ratio for one eye

    EAR = ||top - bottom|| / ||outer - inner||. Lower values mean a more
    closed eye; typical open values sit around 0.25-0.35.

    Args:
        face: Face landmarks (may be None or incomplete)
        side: 'left' or 'right'

    Returns:
        float: EAR, 0.0 when a landmark is missing or the eye width is 0
    """
    try:
        idx = EYE_INDICES[side]
    except KeyError:
        raise ValueError(f"side must be 'left' or 'right', got {side!r}")

    top = landmark_at(face, idx['top'])
    bottom = landmark_at(face, idx['bottom'])
    outer = landmark_at(face, idx['outer'])
    inner = landmark_at(face, idx['inner'])
    if top is None or bottom is None or outer is None or inner is None:
        return 0.0

    horizontal = distance(outer, inner)
    if horizontal <= 0:
        return 0.0
    return distance(top, bottom) / horizontal


def blend_shape_score(scores: Optional[BlendShapeScores], name: str) -> float:
    """Detector confidence for a named blend shape, 0.0 if not reported"""
    if scores is None:
        return 0.0
    value = scores.get(name)
    if value is None:
        return 0.0
    return float(value)
