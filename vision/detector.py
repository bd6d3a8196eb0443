# vision/detector.py
import logging
from pathlib import Path

import cv2
import mediapipe as mp
from mediapipe.tasks import python as mp_tasks
from mediapipe.tasks.python import vision as mp_vision

from vision.landmarks import face_result_from_mediapipe, hand_result_from_mediapipe
from vision.settings import DetectionSettings

logger = logging.getLogger(__name__)

FACE_TASK_URL = "https://storage.googleapis.com/mediapipe-models/face_landmarker/face_landmarker/float16/1/face_landmarker.task"
HAND_TASK_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"


class LandmarkDetector:
    """
    Face and hand landmark detection using MediaPipe Tasks
    - Runs FaceLandmarker (with blend shapes) and HandLandmarker in VIDEO mode
    - Applies staged confidence thresholds on (re)initialization
    - Converts results into FaceResult / HandResult
    """

    def __init__(self, settings=None, config=None):
        """
        Initialize the detector wrapper (models are built by initialize())

        Args:
            settings: DetectionSettings holding staged/active thresholds
            config: Configuration dictionary with detection parameters
        """
        self.config = config or {}
        self.settings = settings or DetectionSettings(self.config)

        detection_config = self.config.get('detection', {})
        self.num_faces = detection_config.get('num_faces', 2)
        self.num_hands = detection_config.get('num_hands', 2)
        self.output_blendshapes = detection_config.get('output_face_blendshapes', True)
        self.face_model_path = Path(detection_config.get('face_model_path', 'models/face_landmarker.task'))
        self.hand_model_path = Path(detection_config.get('hand_model_path', 'models/hand_landmarker.task'))

        self.face_landmarker = None
        self.hand_landmarker = None
        self._last_timestamp_ms = -1

    @property
    def ready(self):
        return self.face_landmarker is not None and self.hand_landmarker is not None

    def initialize(self):
        """
        (Re)build both landmarkers with the staged confidence thresholds

        Raises:
            FileNotFoundError: If a model file is missing
        """
        self._check_model(self.face_model_path, FACE_TASK_URL)
        self._check_model(self.hand_model_path, HAND_TASK_URL)

        self.close()
        thresholds = self.settings.activate()

        face_options = mp_vision.FaceLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(self.face_model_path)),
            running_mode=mp_vision.RunningMode.VIDEO,
            num_faces=self.num_faces,
            output_face_blendshapes=self.output_blendshapes,
            min_face_detection_confidence=thresholds.detection,
            min_tracking_confidence=thresholds.tracking,
        )
        hand_options = mp_vision.HandLandmarkerOptions(
            base_options=mp_tasks.BaseOptions(model_asset_path=str(self.hand_model_path)),
            running_mode=mp_vision.RunningMode.VIDEO,
            num_hands=self.num_hands,
            min_hand_detection_confidence=thresholds.detection,
            min_tracking_confidence=thresholds.tracking,
        )

        self.face_landmarker = mp_vision.FaceLandmarker.create_from_options(face_options)
        self.hand_landmarker = mp_vision.HandLandmarker.create_from_options(hand_options)
        self._last_timestamp_ms = -1

        logger.info("Landmarkers ready (faces=%d, hands=%d, detection=%.2f, tracking=%.2f)",
                    self.num_faces, self.num_hands, thresholds.detection, thresholds.tracking)

    def _check_model(self, path, url):
        if not path.exists():
            raise FileNotFoundError(
                f"Model file not found: {path}\n"
                f"Download it from {url} or set the path in the 'detection' config section."
            )

    def detect(self, frame, timestamp_ms):
        """
        Run both landmarkers on one frame

        Args:
            frame: Input frame (BGR format)
            timestamp_ms: Frame timestamp in milliseconds

        Returns:
            tuple: (FaceResult, HandResult)
        """
        if not self.ready:
            raise RuntimeError("LandmarkDetector.initialize() must be called before detect()")

        # VIDEO mode requires strictly increasing timestamps
        timestamp_ms = max(int(timestamp_ms), self._last_timestamp_ms + 1)
        self._last_timestamp_ms = timestamp_ms

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        face_result = self.face_landmarker.detect_for_video(image, timestamp_ms)
        hand_result = self.hand_landmarker.detect_for_video(image, timestamp_ms)

        return face_result_from_mediapipe(face_result), hand_result_from_mediapipe(hand_result)

    def close(self):
        """Release MediaPipe resources"""
        if self.face_landmarker is not None:
            self.face_landmarker.close()
            self.face_landmarker = None
        if self.hand_landmarker is not None:
            self.hand_landmarker.close()
            self.hand_landmarker = None
