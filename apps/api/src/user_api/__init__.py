"""FastAPI service for user management."""
