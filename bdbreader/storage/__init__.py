"""Page-level decoding of database files."""
