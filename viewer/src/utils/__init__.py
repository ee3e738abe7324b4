"""Geometry, hit testing and error reporting helpers."""
