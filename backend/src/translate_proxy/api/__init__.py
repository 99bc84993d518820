"""API handlers for the translate proxy."""
