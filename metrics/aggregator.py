# metrics/aggregator.py
import logging
from dataclasses import asdict, dataclass, fields

from metrics.smoothing import DEFAULT_FACTOR, FPS_FACTOR, Smoother
from vision.eyes import BLINK_LEFT, BLINK_RIGHT, blend_shape_score, eye_aspect_ratio
from vision.geometry import distance
from vision.hands import THUMBS_UP_MIN_PINCH, is_thumbs_up, pinch_distance
from vision.landmarks import FaceResult, HandResult
from vision.mouth import mouth_open_ratio
from vision.pose import face_center, head_pose

logger = logging.getLogger(__name__)

MIN_DT_S = 1e-3

# Continuous metrics, each with its own smoother
SMOOTHED_METRICS = (
    'left_ear', 'right_ear', 'blink_left', 'blink_right', 'mouth_open',
    'velocity', 'yaw', 'pitch', 'roll', 'pinch',
)


@dataclass(frozen=True)
class MetricsFrame:
    """Smoothed metrics snapshot emitted once per tick"""
    timestamp: float
    faces: int = 0
    hands: int = 0
    left_ear: float = 0.0
    right_ear: float = 0.0
    blink_left: float = 0.0
    blink_right: float = 0.0
    mouth_open: float = 0.0
    velocity: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    pinch: float = 0.0
    thumbs_up: bool = False
    fps: float = 0.0

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]

    def to_dict(self):
        return asdict(self)


class FrameAggregator:
    """
    Turns per-tick face/hand detections into a smoothed MetricsFrame
    - Runs the feature extractors on the primary (first) face
    - Takes the max pinch and any thumbs-up over all hands
    - Tracks head velocity from the face center and a smoothed frame rate

    One instance per camera stream; not safe to share between call paths.
    """

    def __init__(self, config=None, start_time=None):
        """
        Initialize the aggregator with configuration

        Args:
            config: Configuration dictionary with smoothing/gesture/tracking sections
            start_time: Reference time (seconds) for the first tick's interval
        """
        self.config = config or {}

        smoothing_config = self.config.get('smoothing', {})
        gestures_config = self.config.get('gestures', {})
        tracking_config = self.config.get('tracking', {})

        self.factor = smoothing_config.get('factor', DEFAULT_FACTOR)
        self.fps_factor = smoothing_config.get('fps_factor', FPS_FACTOR)
        self.min_dt = smoothing_config.get('min_dt_s', MIN_DT_S)
        self.thumbs_up_min_pinch = gestures_config.get('thumbs_up_min_pinch', THUMBS_UP_MIN_PINCH)
        self.reset_center_on_face_loss = tracking_config.get('reset_center_on_face_loss', False)

        self.smoothers = {name: Smoother(self.factor) for name in SMOOTHED_METRICS}
        self.fps = Smoother(self.fps_factor)
        self.previous_center = None
        self.last_timestamp = start_time
        self.tick_count = 0

    def update(self, face_result=None, hand_result=None, timestamp=0.0):
        """
        Process one tick of detector output

        Args:
            face_result: FaceResult for this tick (None means no faces)
            hand_result: HandResult for this tick (None means no hands)
            timestamp: Current time in seconds

        Returns:
            MetricsFrame: Smoothed metrics for this tick
        """
        face_result = face_result or FaceResult()
        hand_result = hand_result or HandResult()

        dt = None
        if self.last_timestamp is not None:
            dt = max(timestamp - self.last_timestamp, self.min_dt)
        self.last_timestamp = timestamp
        self.tick_count += 1

        raw = dict.fromkeys(SMOOTHED_METRICS, 0.0)
        raw.update(self._face_metrics(face_result, dt))

        thumbs_up = False
        if hand_result.count:
            raw['pinch'] = max(pinch_distance(hand) for hand in hand_result.landmarks)
            thumbs_up = any(is_thumbs_up(hand, self.thumbs_up_min_pinch)
                            for hand in hand_result.landmarks)

        smoothed = {name: self.smoothers[name].update(raw[name]) for name in SMOOTHED_METRICS}

        # No reference time on the very first tick without start_time
        if dt is not None:
            self.fps.update(1.0 / dt)

        frame = MetricsFrame(
            timestamp=timestamp,
            faces=face_result.count,
            hands=hand_result.count,
            thumbs_up=thumbs_up,
            fps=self.fps.value,
            **smoothed
        )
        logger.debug("Tick %d: %s", self.tick_count, frame)
        return frame

    def _face_metrics(self, face_result, dt):
        """
        Raw face metrics for the primary face

        Args:
            face_result: FaceResult for this tick
            dt: Clamped interval since the previous tick (None on the first tick)

        Returns:
            dict: Raw metric values, empty when no face is present
        """
        face, scores = face_result.primary()
        if face is None:
            if self.reset_center_on_face_loss:
                self.previous_center = None
            return {}

        pose = head_pose(face)
        metrics = {
            'left_ear': eye_aspect_ratio(face, 'left'),
            'right_ear': eye_aspect_ratio(face, 'right'),
            'blink_left': blend_shape_score(scores, BLINK_LEFT),
            'blink_right': blend_shape_score(scores, BLINK_RIGHT),
            'mouth_open': mouth_open_ratio(face),
            'yaw': pose.yaw,
            'pitch': pose.pitch,
            'roll': pose.roll,
        }

        center = face_center(face)
        if center is not None:
            if self.previous_center is not None and dt is not None:
                metrics['velocity'] = distance(center, self.previous_center) / dt
            self.previous_center = center

        return metrics

    def resume(self, timestamp):
        """
        Restart the tick clock after a pause, keeping smoothed values and the face center

        Args:
            timestamp: Reference time (seconds) for the next tick's interval
        """
        self.last_timestamp = timestamp

    def reset(self, start_time=None):
        """Reset all smoothers, the stored face center and the tick clock"""
        for smoother in self.smoothers.values():
            smoother.reset()
        self.fps.reset()
        self.previous_center = None
        self.last_timestamp = start_time
        self.tick_count = 0
