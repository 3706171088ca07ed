"""Utility functions for brewctl."""
