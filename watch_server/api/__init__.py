"""Watch Server REST API."""
