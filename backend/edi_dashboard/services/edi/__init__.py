"""EDI file decoding, parsing and ingestion."""
