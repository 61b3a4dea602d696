"""Domain entities, snapshot records and errors."""
