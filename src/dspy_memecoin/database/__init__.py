"""Local state persistence."""
