"""Packaged output templates."""
