"""Textual widgets and modal screens for the got dashboard."""
