"""FastAPI application for the Subsonic protocol."""
