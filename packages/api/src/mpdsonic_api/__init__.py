"""mpdsonic-api - Subsonic REST API served from an MPD database."""
