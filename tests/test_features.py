"""
Feature extractor tests

Covers the geometry helpers and the face extractors (EAR, mouth ratio,
head pose, face center, blend shape lookup) on synthetic landmarks,
including missing and degenerate inputs that must resolve to neutral values.
"""

import math
import os
import sys
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tests.fixtures.synthetic_landmarks import make_face_landmarks, make_uniform_face
from vision.eyes import blend_shape_score, eye_aspect_ratio
from vision.geometry import distance, landmark_at
from vision.landmarks import Point
from vision.mouth import mouth_open_ratio
from vision.pose import HeadPose, face_center, head_pose


class TestGeometry(unittest.TestCase):

    def test_distance_is_euclidean_in_xy(self):
        self.assertAlmostEqual(distance(Point(0.0, 0.0), Point(0.3, 0.4)), 0.5)

    def test_distance_ignores_depth(self):
        self.assertAlmostEqual(distance(Point(0.1, 0.1, 0.0), Point(0.1, 0.1, 0.9)), 0.0)

    def test_coincident_points_have_zero_distance(self):
        p = Point(0.42, 0.17)
        self.assertEqual(distance(p, p), 0.0)

    def test_landmark_at_handles_absent_entries(self):
        points = [Point(0.1, 0.2), None]
        self.assertEqual(landmark_at(points, 0), Point(0.1, 0.2))
        self.assertIsNone(landmark_at(points, 1))
        self.assertIsNone(landmark_at(points, 5))
        self.assertIsNone(landmark_at(None, 0))
        self.assertIsNone(landmark_at(points, -1))


class TestEyeAspectRatio(unittest.TestCase):

    def test_open_eyes(self):
        face = make_face_landmarks(eye_gap=0.02, eye_width=0.08)
        self.assertAlmostEqual(eye_aspect_ratio(face, 'left'), 0.25)
        self.assertAlmostEqual(eye_aspect_ratio(face, 'right'), 0.25)

    def test_closed_eye_when_lids_coincide(self):
        face = make_face_landmarks(eye_gap=0.0)
        self.assertEqual(eye_aspect_ratio(face, 'left'), 0.0)
        self.assertEqual(eye_aspect_ratio(face, 'right'), 0.0)

    def test_missing_landmark_gives_zero(self):
        for idx in (159, 145, 33, 133):
            face = make_face_landmarks(overrides={idx: None})
            self.assertEqual(eye_aspect_ratio(face, 'left'), 0.0, idx)
        # The other eye is unaffected
        face = make_face_landmarks(overrides={159: None})
        self.assertGreater(eye_aspect_ratio(face, 'right'), 0.0)

    def test_zero_eye_width_is_guarded(self):
        face = make_face_landmarks(eye_width=0.0)
        self.assertEqual(eye_aspect_ratio(face, 'left'), 0.0)

    def test_truncated_or_empty_sets(self):
        self.assertEqual(eye_aspect_ratio([], 'left'), 0.0)
        self.assertEqual(eye_aspect_ratio(None, 'right'), 0.0)
        self.assertEqual(eye_aspect_ratio(make_face_landmarks()[:100], 'left'), 0.0)

    def test_non_negative(self):
        for gap in (0.0, 0.005, 0.01, 0.03):
            for width in (0.02, 0.05, 0.1):
                face = make_face_landmarks(eye_gap=gap, eye_width=width)
                self.assertGreaterEqual(eye_aspect_ratio(face, 'left'), 0.0)

    def test_unknown_side_rejected(self):
        with self.assertRaises(ValueError):
            eye_aspect_ratio(make_face_landmarks(), 'middle')


class TestMouthOpenRatio(unittest.TestCase):

    def test_lip_gap_over_width(self):
        face = make_face_landmarks(lip_gap=0.02, mouth_width=0.1)
        self.assertAlmostEqual(mouth_open_ratio(face), 0.2)

    def test_missing_corner_gives_zero(self):
        face = make_face_landmarks(overrides={308: None})
        self.assertEqual(mouth_open_ratio(face), 0.0)

    def test_zero_width_is_guarded(self):
        face = make_face_landmarks(mouth_width=0.0)
        self.assertEqual(mouth_open_ratio(face), 0.0)

    def test_closed_mouth(self):
        self.assertEqual(mouth_open_ratio(make_face_landmarks(lip_gap=0.0)), 0.0)


class TestHeadPose(unittest.TestCase):

    def test_level_face_looking_ahead(self):
        pose = head_pose(make_face_landmarks(nose=(0.5, 0.55)))
        self.assertAlmostEqual(pose.roll, 0.0)
        self.assertAlmostEqual(pose.yaw, 0.0)
        # Nose 0.15 below the eye line, doubled
        self.assertAlmostEqual(pose.pitch, 0.3)

    def test_nose_offset_drives_yaw(self):
        pose = head_pose(make_face_landmarks(nose=(0.55, 0.5)))
        self.assertAlmostEqual(pose.yaw, 0.1)
        self.assertAlmostEqual(pose.pitch, 0.2)

    def test_tilted_eye_line_drives_roll(self):
        face = make_face_landmarks(overrides={263: Point(0.65, 0.7)})
        self.assertAlmostEqual(head_pose(face).roll, math.pi / 4)

    def test_missing_source_landmark_gives_zero_pose(self):
        for idx in (1, 33, 263):
            face = make_face_landmarks(overrides={idx: None})
            self.assertEqual(head_pose(face), HeadPose(0.0, 0.0, 0.0))
        self.assertEqual(head_pose([]), HeadPose())


class TestFaceCenter(unittest.TestCase):

    def test_mean_of_all_points(self):
        center = face_center([Point(0.2, 0.4), Point(0.4, 0.6), Point(0.6, 0.2)])
        self.assertAlmostEqual(center.x, 0.4)
        self.assertAlmostEqual(center.y, 0.4)

    def test_uniform_face(self):
        center = face_center(make_uniform_face(0.4, 0.5))
        self.assertAlmostEqual(center.x, 0.4)
        self.assertAlmostEqual(center.y, 0.5)

    def test_missing_points_are_skipped(self):
        center = face_center([Point(0.2, 0.4), None, Point(0.4, 0.6)])
        self.assertAlmostEqual(center.x, 0.3)
        self.assertAlmostEqual(center.y, 0.5)
        self.assertIsNone(face_center([None, None]))

    def test_empty_face_has_no_center(self):
        self.assertIsNone(face_center([]))
        self.assertIsNone(face_center(None))


class TestBlendShapeScore(unittest.TestCase):

    def test_lookup_by_name(self):
        scores = {'eyeBlinkLeft': 0.8, 'eyeBlinkRight': 0.1}
        self.assertAlmostEqual(blend_shape_score(scores, 'eyeBlinkLeft'), 0.8)

    def test_absent_category_or_scores(self):
        self.assertEqual(blend_shape_score({'jawOpen': 0.5}, 'eyeBlinkLeft'), 0.0)
        self.assertEqual(blend_shape_score(None, 'eyeBlinkLeft'), 0.0)


if __name__ == '__main__':
    unittest.main()
