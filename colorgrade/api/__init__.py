"""Local HTTP API for the preset engine."""
