"""Packaged provider fingerprint tables."""
