"""Subsonic REST endpoints."""
