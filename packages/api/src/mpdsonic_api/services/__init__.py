"""Application services for mpdsonic-api."""
