"""Labelling pipeline, GitHub integration and CLI."""
