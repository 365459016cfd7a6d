"""CivicLens API: representative lookup, ratings, and moderated discussion."""

__version__ = "0.1.0"
