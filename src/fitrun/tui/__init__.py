"""Textual user interface for fitrun."""
