"""FastAPI application for the ClaudLE game server."""
