"""Domain services (credentials, catalog)."""
