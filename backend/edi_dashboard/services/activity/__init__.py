"""Activity log sink."""
