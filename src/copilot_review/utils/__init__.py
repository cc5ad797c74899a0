"""Utility modules shared across copilot-review (atomic file writes)."""
