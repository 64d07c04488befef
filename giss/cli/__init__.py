"""Command line interface for giss."""
