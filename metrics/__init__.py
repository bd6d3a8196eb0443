"""Temporal smoothing and per-tick metric aggregation."""
