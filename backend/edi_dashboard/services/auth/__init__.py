"""Login, sessions and users."""
