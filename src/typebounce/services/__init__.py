"""Runtime services (logging)."""
