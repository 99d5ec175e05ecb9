"""EDI order dashboard backend."""
