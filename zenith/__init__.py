"""Zenith - student marketplace API."""
