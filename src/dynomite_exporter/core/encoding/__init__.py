"""Encoders for metric exposition formats."""
