"""Detection confidence settings tests (staged vs active thresholds)."""

import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vision.settings import ConfidenceThresholds, DetectionSettings


class TestConfidenceThresholds(unittest.TestCase):

    def test_defaults(self):
        t = ConfidenceThresholds()
        self.assertEqual((t.detection, t.tracking), (0.5, 0.5))

    def test_bounds_are_exclusive(self):
        for bad in (0.0, 1.0, -0.2, 1.3):
            with self.assertRaises(ValueError):
                ConfidenceThresholds(detection=bad)
            with self.assertRaises(ValueError):
                ConfidenceThresholds(tracking=bad)


class TestDetectionSettings(unittest.TestCase):

    def test_initial_values_from_config(self):
        settings = DetectionSettings({'detection': {'min_detection_confidence': 0.7,
                                                    'min_tracking_confidence': 0.4}})
        self.assertEqual(settings.active, ConfidenceThresholds(0.7, 0.4))
        self.assertEqual(settings.staged, settings.active)
        self.assertFalse(settings.pending)

    def test_staged_value_waits_for_activation(self):
        settings = DetectionSettings()
        settings.stage(detection=0.8)

        self.assertTrue(settings.pending)
        self.assertEqual(settings.active, ConfidenceThresholds(0.5, 0.5))
        self.assertEqual(settings.staged, ConfidenceThresholds(0.8, 0.5))

        self.assertEqual(settings.activate(), ConfidenceThresholds(0.8, 0.5))
        self.assertFalse(settings.pending)

    def test_invalid_stage_keeps_previous(self):
        settings = DetectionSettings()
        with self.assertRaises(ValueError):
            settings.stage(tracking=1.5)
        self.assertEqual(settings.staged, ConfidenceThresholds(0.5, 0.5))

    def test_nudge_steps_and_clamps(self):
        settings = DetectionSettings()
        self.assertEqual(settings.nudge(0.05), ConfidenceThresholds(0.55, 0.55))
        for _ in range(20):
            settings.nudge(0.05)
        self.assertEqual(settings.staged, ConfidenceThresholds(0.9, 0.9))
        for _ in range(30):
            settings.nudge(-0.05)
        self.assertEqual(settings.staged, ConfidenceThresholds(0.1, 0.1))
        self.assertEqual(settings.active, ConfidenceThresholds(0.5, 0.5))


if __name__ == '__main__':
    unittest.main()
