"""Shared helpers for bankdedupe."""
