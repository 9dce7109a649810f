"""Services backed by external AI providers."""
