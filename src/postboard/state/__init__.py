"""View state transitions and the session record store."""
