"""Infrastructure layer - Configuration, observability, API and CLI."""
