"""Core listing and disk usage logic."""
