"""FastAPI dependencies: authentication, pagination, rate limiting and services."""
