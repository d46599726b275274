"""Request and response schemas (camelCase JSON)."""
