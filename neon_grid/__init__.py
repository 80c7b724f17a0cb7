"""Neon Grid idle game server."""
