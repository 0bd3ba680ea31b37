"""Core path handling and declaration models."""
