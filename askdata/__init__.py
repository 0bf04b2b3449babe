"""Natural-language questions over in-memory tables."""
