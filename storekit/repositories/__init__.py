"""Entity store, derived index and snapshot persistence."""
