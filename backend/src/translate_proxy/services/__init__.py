"""Service clients for the translate proxy."""
