"""Conversion of MediaPipe task results into FaceResult / HandResult."""

import os
import sys
import unittest
from types import SimpleNamespace

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vision.landmarks import (
    FaceResult, HandResult, Point, face_result_from_mediapipe, hand_result_from_mediapipe,
    to_pixel,
)


def lm(x, y, z=0.0):
    return SimpleNamespace(x=x, y=y, z=z)


def category(name, score):
    return SimpleNamespace(category_name=name, score=score)


class TestFaceConversion(unittest.TestCase):

    def test_landmarks_and_blend_shapes(self):
        result = SimpleNamespace(
            face_landmarks=[[lm(0.1, 0.2, -0.01), lm(0.3, 0.4)], [lm(0.5, 0.5)]],
            face_blendshapes=[[category('eyeBlinkLeft', 0.7), category('eyeBlinkRight', 0.2)]],
        )
        face = face_result_from_mediapipe(result)

        self.assertEqual(face.count, 2)
        self.assertEqual(face.landmarks[0][0], Point(0.1, 0.2, -0.01))
        self.assertEqual(face.blend_shapes[0], {'eyeBlinkLeft': 0.7, 'eyeBlinkRight': 0.2})
        # Second face has no blend shapes
        self.assertIsNone(face.blend_shapes[1])

        landmarks, scores = face.primary()
        self.assertEqual(len(landmarks), 2)
        self.assertEqual(scores['eyeBlinkLeft'], 0.7)

    def test_no_faces(self):
        empty = face_result_from_mediapipe(SimpleNamespace(face_landmarks=[], face_blendshapes=[]))
        self.assertEqual(empty, FaceResult())
        self.assertEqual(empty.primary(), (None, None))
        self.assertEqual(face_result_from_mediapipe(None), FaceResult())

    def test_blend_shapes_disabled(self):
        result = SimpleNamespace(face_landmarks=[[lm(0.1, 0.1)]], face_blendshapes=None)
        face = face_result_from_mediapipe(result)
        self.assertEqual(face.blend_shapes, (None,))


class TestHandConversion(unittest.TestCase):

    def test_hands(self):
        result = SimpleNamespace(hand_landmarks=[[lm(0.1, 0.9)] * 21, [lm(0.2, 0.8)] * 21])
        hands = hand_result_from_mediapipe(result)
        self.assertEqual(hands.count, 2)
        self.assertEqual(len(hands.landmarks[1]), 21)
        self.assertEqual(hands.landmarks[1][0], Point(0.2, 0.8, 0.0))

    def test_no_hands(self):
        self.assertEqual(hand_result_from_mediapipe(SimpleNamespace(hand_landmarks=[])), HandResult())
        self.assertEqual(hand_result_from_mediapipe(None), HandResult())


class TestPixelMapping(unittest.TestCase):

    def test_unmirrored(self):
        self.assertEqual(to_pixel(Point(0.25, 0.5), 640, 480), (160, 240))

    def test_mirrored_flips_x_only(self):
        self.assertEqual(to_pixel(Point(0.25, 0.5), 640, 480, mirror=True), (480, 240))

    def test_left_eye_lands_on_the_mirrored_side(self):
        # Left eye corner (image-left on the raw frame) shows on the right of a mirrored preview
        left_eye = Point(0.3, 0.4)
        right_eye = Point(0.7, 0.4)
        mirrored_left, _ = to_pixel(left_eye, 100, 100, mirror=True)
        mirrored_right, _ = to_pixel(right_eye, 100, 100, mirror=True)
        self.assertGreater(mirrored_left, mirrored_right)


if __name__ == '__main__':
    unittest.main()
