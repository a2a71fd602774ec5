"""Officing: gamified workplace check-in API."""
