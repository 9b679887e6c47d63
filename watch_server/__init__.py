"""Watch Server: catalog of movies, series and episodes behind a JWT-protected REST API."""

__version__ = "1.0.0"
