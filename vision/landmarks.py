# vision/landmarks.py
# Landmark containers shared by the feature extractors and the aggregator.

from dataclasses import dataclass, field
from typing import Mapping, NamedTuple, Optional, Sequence, Tuple


class Point(NamedTuple):
    """Normalized landmark coordinate (0..1 relative to the frame)."""
    x: float
    y: float
    z: float = 0.0


# Face: 468 points (478 with iris refinement). Hand: 21 points.
LandmarkSet = Sequence[Point]
BlendShapeScores = Mapping[str, float]


@dataclass(frozen=True)
class FaceResult:
    """
    Face detector output for one tick

    blend_shapes is parallel to landmarks; an entry is None when the
    detector produced no scores for that face.
    """
    landmarks: Tuple[LandmarkSet, ...] = ()
    blend_shapes: Tuple[Optional[BlendShapeScores], ...] = field(default=())

    @property
    def count(self) -> int:
        return len(self.landmarks)

    def primary(self) -> Tuple[Optional[LandmarkSet], Optional[BlendShapeScores]]:
        """First detected face and its blend shapes, (None, None) if no face"""
        if not self.landmarks:
            return None, None
        scores = self.blend_shapes[0] if self.blend_shapes else None
        return self.landmarks[0], scores


@dataclass(frozen=True)
class HandResult:
    """Hand detector output for one tick"""
    landmarks: Tuple[LandmarkSet, ...] = ()

    @property
    def count(self) -> int:
        return len(self.landmarks)


def _to_points(landmarks) -> Tuple[Point, ...]:
    return tuple(Point(float(p.x), float(p.y), float(getattr(p, 'z', 0.0) or 0.0))
                 for p in landmarks)


def face_result_from_mediapipe(result) -> FaceResult:
    """
    Convert a MediaPipe FaceLandmarkerResult into a FaceResult

    Args:
        result: FaceLandmarkerResult (or None when detection was skipped)

    Returns:
        FaceResult: Points per face plus blend shapes keyed by category name
    """
    if result is None:
        return FaceResult()

    faces = tuple(_to_points(lm) for lm in (getattr(result, 'face_landmarks', None) or []))
    blends = list(getattr(result, 'face_blendshapes', None) or [])

    scores = []
    for i in range(len(faces)):
        if i < len(blends) and blends[i]:
            scores.append({c.category_name: float(c.score) for c in blends[i]})
        else:
            scores.append(None)

    return FaceResult(landmarks=faces, blend_shapes=tuple(scores))


def hand_result_from_mediapipe(result) -> HandResult:
    """Convert a MediaPipe HandLandmarkerResult into a HandResult"""
    if result is None:
        return HandResult()
    hands = getattr(result, 'hand_landmarks', None) or []
    return HandResult(landmarks=tuple(_to_points(lm) for lm in hands))


def to_pixel(point: Point, width: int, height: int, mirror: bool = False) -> Tuple[int, int]:
    """
    Map a normalized landmark to pixel coordinates

    Args:
        point: Landmark detected on the unmirrored frame
        width: Frame width in pixels
        height: Frame height in pixels
        mirror: Flip x to match a horizontally mirrored preview

    Returns:
        tuple: (x, y) pixel position
    """
    x = point.x * width
    if mirror:
        x = width - x
    return int(x), int(point.y * height)
