"""Order listing, statistics and status management."""
