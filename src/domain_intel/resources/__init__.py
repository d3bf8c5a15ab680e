"""Packaged data resources."""
