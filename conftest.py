"""Keeps the repository root importable so tests can import `src.attentrack.attentrack`."""
