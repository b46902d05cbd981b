"""Feature flags service."""
