# main.py - Face & Hand Vision Tracker
import argparse
import logging
import time

import cv2
import numpy as np

from config import DEFAULT_CONFIG_PATH, load_config, setup_logging
from data_logger import DataLogger
from metrics.aggregator import FrameAggregator, MetricsFrame
from vision.detector import LandmarkDetector
from vision.landmarks import FaceResult, HandResult, to_pixel
from vision.settings import CONFIDENCE_STEP, DetectionSettings

logger = logging.getLogger(__name__)


class VisionTrackerSystem:
    """
    Real-time face and hand tracker integrating detection and metric components
    Shows blink, mouth, head pose, movement, pinch and thumbs-up metrics
    next to the camera preview
    """

    def __init__(self, config=None, start_time=None):
        """
        Initialize the tracker system

        Args:
            config: Configuration dictionary (see config.get_default_config)
            start_time: Reference time for the first tick (defaults to now)
        """
        self.config = config or load_config()

        self.settings = DetectionSettings(self.config)
        self.detector = LandmarkDetector(self.settings, self.config)
        if start_time is None:
            start_time = time.perf_counter()
        self.aggregator = FrameAggregator(self.config, start_time=start_time)

        logging_config = self.config.get('logging', {})
        self.record_metrics = logging_config.get('record_metrics', False)
        self.data_logger = DataLogger(logging_config.get('log_dir', 'logs'))

        self.frame_count = 0
        self.last_thumbs_up = False
        self.paused = False
        self.last_metrics = MetricsFrame(timestamp=start_time)

    def start(self):
        """Build the landmark models with the staged confidence"""
        self.detector.initialize()

    def restart(self):
        """Re-initialize the detector so staged confidence takes effect"""
        self.detector.initialize()
        self.aggregator.reset(start_time=time.perf_counter())
        self.last_thumbs_up = False
        active = self.settings.active
        self.data_logger.log_event(
            "Detector Restarted",
            f"detection={active.detection:.2f} tracking={active.tracking:.2f}"
        )

    def toggle_pause(self):
        """
        Pause or resume detection; the preview keeps running while paused

        Returns:
            bool: True if detection is now paused
        """
        self.paused = not self.paused
        if self.paused:
            self.last_thumbs_up = False
            self.data_logger.log_event("Detection Paused")
        else:
            # Paused time must not count as one long tick
            self.aggregator.resume(time.perf_counter())
            self.data_logger.log_event("Detection Resumed")
        return self.paused

    def process_frame(self, frame, timestamp=None):
        """
        Process a single frame through the detection and metric pipeline

        Args:
            frame: Input camera frame (BGR)
            timestamp: Frame time in seconds (defaults to now)

        Returns:
            tuple: (MetricsFrame, display_frame, FaceResult, HandResult)
        """
        if timestamp is None:
            timestamp = time.perf_counter()
        self.frame_count += 1

        if self.config['camera']['mirror_effect']:
            display_frame = cv2.flip(frame, 1)
        else:
            display_frame = frame.copy()

        if self.paused:
            return self.last_metrics, display_frame, FaceResult(), HandResult()

        # Detect on the camera's own orientation so left/right and yaw/roll signs hold
        face_result, hand_result = self.detector.detect(frame, timestamp * 1000)
        metrics = self.aggregator.update(face_result, hand_result, timestamp)
        self.last_metrics = metrics

        if metrics.thumbs_up and not self.last_thumbs_up:
            self.data_logger.log_event("Thumbs Up", f"Hands={metrics.hands} Pinch={metrics.pinch:.3f}")
        self.last_thumbs_up = metrics.thumbs_up

        if self.record_metrics:
            self.data_logger.log_metrics(metrics)

        return metrics, display_frame, face_result, hand_result

    def draw_landmarks(self, frame, face_result, hand_result):
        """
        Draw face and hand landmark points on the frame

        Args:
            frame: Frame to draw on (already mirrored if configured)
            face_result: FaceResult detected on the unmirrored frame
            hand_result: HandResult detected on the unmirrored frame
        """
        height, width = frame.shape[:2]
        colors = self.config['display']['colors']
        mirror = self.config['camera']['mirror_effect']

        for face in face_result.landmarks:
            for point in face:
                if point is None:
                    continue
                cv2.circle(frame, to_pixel(point, width, height, mirror), 1,
                           colors['face_landmarks'], -1)

        for hand in hand_result.landmarks:
            for point in hand:
                if point is None:
                    continue
                cv2.circle(frame, to_pixel(point, width, height, mirror), 3,
                           colors['hand_landmarks'], -1)

    def draw_dashboard(self, frame, metrics):
        """
        Draw the metrics side panel

        Args:
            frame: Frame to use for dimensions
            metrics: MetricsFrame for this frame

        Returns:
            numpy.ndarray: Dashboard image
        """
        height = frame.shape[0]
        dashboard_width = self.config['display']['dashboard_width']
        colors = self.config['display']['colors']

        dashboard = np.zeros((height, dashboard_width, 3), dtype=np.uint8)
        dashboard[:] = colors['background']

        y_position = 40
        cv2.putText(dashboard, "VISION TRACKER", (20, y_position),
                    cv2.FONT_HERSHEY_DUPLEX, 0.8, colors['text_primary'], 2)
        y_position += 40

        def section(title):
            nonlocal y_position
            cv2.line(dashboard, (10, y_position - 15), (dashboard_width - 10, y_position - 15),
                     colors['separator'], 1)
            cv2.putText(dashboard, title, (20, y_position + 5),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, colors['text_primary'], 1)
            y_position += 30

        def row(label, value, color=None):
            nonlocal y_position
            cv2.putText(dashboard, f"{label}: {value}", (20, y_position),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.5, color or colors['text_secondary'], 1)
            y_position += 22

        section("FACE METRICS")
        row("Faces", f"{metrics.faces}")
        row("Left EAR", f"{metrics.left_ear:.3f}")
        row("Right EAR", f"{metrics.right_ear:.3f}")
        row("Blink Left", f"{metrics.blink_left:.3f}")
        row("Blink Right", f"{metrics.blink_right:.3f}")
        row("Mouth Open Ratio", f"{metrics.mouth_open:.3f}")
        row("Head Velocity", f"{metrics.velocity:.3f}")
        row("Yaw", f"{metrics.yaw:.3f}")
        row("Pitch", f"{metrics.pitch:.3f}")
        row("Roll", f"{metrics.roll:.3f}")
        y_position += 15

        section("HAND METRICS")
        row("Hands", f"{metrics.hands}")
        row("Max Pinch Distance", f"{metrics.pinch:.3f}")
        if metrics.thumbs_up:
            row("Thumbs Up", "YES", colors['thumbs_up'])
        else:
            row("Thumbs Up", "no")
        y_position += 15

        section("DETECTION SETTINGS")
        active = self.settings.active
        row("Confidence", f"{active.detection:.2f}")
        if self.settings.pending:
            row("Staged", f"{self.settings.staged.detection:.2f} (press 'r')", colors['pending'])
        if self.paused:
            row("Detection", "PAUSED (press 'p')", colors['pending'])

        cv2.putText(dashboard, f"FPS: {metrics.fps:.1f}", (20, height - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, colors['text_primary'], 1)

        return dashboard

    def cleanup(self):
        self.detector.close()


def get_args():
    p = argparse.ArgumentParser(description="Face & hand vision tracker")
    p.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to configuration YAML")
    p.add_argument("--camera", type=int, default=None, help="Camera index (overrides config)")
    return p.parse_args()


def main():
    """
    Main function to run the vision tracker
    """
    args = get_args()
    config = load_config(args.config)
    setup_logging(config)

    system = VisionTrackerSystem(config)
    system.start()

    camera_config = config['camera']
    camera_index = args.camera if args.camera is not None else camera_config['index']
    cap = cv2.VideoCapture(camera_index)
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, camera_config['width'])
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, camera_config['height'])

    actual_width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
    actual_height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
    logger.info("Camera %s: %dx%d", camera_index, actual_width, actual_height)
    logger.info("Controls: 'q' quit, 'r' restart detector, '+'/'-' confidence, "
                "'p' pause/resume, 's' show config")

    # First tick measures from the moment the camera is ready
    system.aggregator.reset(start_time=time.perf_counter())
    start_time = time.time()

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                logger.error("Failed to capture frame from camera")
                break

            metrics, display_frame, face_result, hand_result = system.process_frame(frame)

            if config['display']['show_landmarks']:
                system.draw_landmarks(display_frame, face_result, hand_result)

            dashboard = system.draw_dashboard(display_frame, metrics)
            combined = np.hstack([display_frame, dashboard])
            cv2.imshow('Vision Tracker', combined)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            elif key == ord('r'):
                system.restart()
            elif key == ord('p'):
                system.toggle_pause()
            elif key in (ord('+'), ord('=')):
                staged = system.settings.nudge(CONFIDENCE_STEP)
                logger.info("Confidence %.2f staged (takes effect on restart)", staged.detection)
            elif key in (ord('-'), ord('_')):
                staged = system.settings.nudge(-CONFIDENCE_STEP)
                logger.info("Confidence %.2f staged (takes effect on restart)", staged.detection)
            elif key == ord('s'):
                logger.info("Detection: %s", config['detection'])
                logger.info("Smoothing: %s", config['smoothing'])
                logger.info("Gestures: %s", config['gestures'])
                logger.info("Tracking: %s", config['tracking'])

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        cap.release()
        cv2.destroyAllWindows()
        system.cleanup()

        total_time = time.time() - start_time
        logger.info("Frames processed: %d in %.1f s", system.frame_count, total_time)


if __name__ == "__main__":
    main()
