"""Per-user notification subsystem for the building management application."""
