"""Catalog, episode and stream resolution for animeav1.com page data."""

__version__ = "0.1.0"
