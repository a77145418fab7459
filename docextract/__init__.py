"""Document task extraction service."""
