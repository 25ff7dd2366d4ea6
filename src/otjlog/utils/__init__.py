"""Utility functions for otjlog."""
