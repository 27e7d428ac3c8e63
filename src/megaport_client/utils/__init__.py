"""Utility helpers for the Megaport client."""
