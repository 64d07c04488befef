"""Utility helpers for giss."""
