"""Static seed data."""
