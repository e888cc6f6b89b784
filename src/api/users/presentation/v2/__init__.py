"""Version 2 of the users HTTP API."""
