"""Upstream source adapters."""
