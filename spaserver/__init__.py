"""Single Page Application web server with a demonstration health API."""
