"""Utility helpers for segmark."""
