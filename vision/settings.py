# vision/settings.py
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Range offered for interactive adjustment
MIN_CONFIDENCE = 0.1
MAX_CONFIDENCE = 0.9
CONFIDENCE_STEP = 0.05


@dataclass(frozen=True)
class ConfidenceThresholds:
    """Detection and tracking confidence forwarded to the landmark models"""
    detection: float = 0.5
    tracking: float = 0.5

    def __post_init__(self):
        for name in ('detection', 'tracking'):
            value = getattr(self, name)
            if not 0.0 < value < 1.0:
                raise ValueError(f"{name} confidence must be in (0, 1), got {value}")


class DetectionSettings:
    """
    Two-phase confidence configuration

    Changes are staged and only become active when the detector is
    (re)initialized and calls activate(). The running models never see a
    staged value.
    """

    def __init__(self, config=None):
        """
        Initialize settings from the 'detection' config section

        Args:
            config: Configuration dictionary
        """
        self.config = config or {}
        detection_config = self.config.get('detection', {})

        initial = ConfidenceThresholds(
            detection=float(detection_config.get('min_detection_confidence', 0.5)),
            tracking=float(detection_config.get('min_tracking_confidence', 0.5)),
        )
        self._active = initial
        self._staged = initial

    @property
    def active(self) -> ConfidenceThresholds:
        return self._active

    @property
    def staged(self) -> ConfidenceThresholds:
        return self._staged

    @property
    def pending(self) -> bool:
        """True when a staged change is waiting for a restart"""
        return self._staged != self._active

    def stage(self, detection=None, tracking=None) -> ConfidenceThresholds:
        """
        Stage new thresholds for the next initialization

        Args:
            detection: New detection confidence (unchanged if None)
            tracking: New tracking confidence (unchanged if None)

        Returns:
            ConfidenceThresholds: The staged value
        """
        self._staged = ConfidenceThresholds(
            detection=self._staged.detection if detection is None else float(detection),
            tracking=self._staged.tracking if tracking is None else float(tracking),
        )
        logger.debug("Staged confidence: %s", self._staged)
        return self._staged

    def nudge(self, delta: float) -> ConfidenceThresholds:
        """Shift both staged thresholds by delta, clamped to the adjustable range"""
        def _clamp(value):
            return round(min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, value + delta)), 2)

        return self.stage(detection=_clamp(self._staged.detection),
                          tracking=_clamp(self._staged.tracking))

    def activate(self) -> ConfidenceThresholds:
        """Promote the staged thresholds; called on detector (re)initialization"""
        if self.pending:
            logger.info("Activating confidence %s (was %s)", self._staged, self._active)
        self._active = self._staged
        return self._active
