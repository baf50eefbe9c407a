"""ClaudLE word game server."""
