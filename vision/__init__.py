"""Landmark geometry, face/hand feature extractors and the MediaPipe detector adapter."""
