"""Derived view helpers."""
