"""Translate proxy backend package."""
