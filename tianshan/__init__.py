"""Tianshan SLG game shell: narrative parsing, game state and special events."""
