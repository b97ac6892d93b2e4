"""Shared test factories and the in-memory chat platform."""
