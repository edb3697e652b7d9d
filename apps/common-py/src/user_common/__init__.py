"""Domain layer for the user management API."""
