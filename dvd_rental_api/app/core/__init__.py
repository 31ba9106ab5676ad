"""Settings, logging, error kinds and database access."""
