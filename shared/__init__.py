"""Helpers shared by command-line entry points."""
