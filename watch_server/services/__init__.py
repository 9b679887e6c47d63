"""Services: password hashing, tokens and the catalog application."""
