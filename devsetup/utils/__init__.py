"""Shared helpers for step actions and the engine."""
