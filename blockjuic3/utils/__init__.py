"""Shared utilities for the blockjuic3 plugin."""
