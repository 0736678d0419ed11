"""Timing primitives."""
