"""Plaza: a small social backend with JWT authentication."""
