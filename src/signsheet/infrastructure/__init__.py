"""Infrastructure layer — SQLite persistence for serialized registers."""
