"""Infrastructure layer - settings, logging, HTTP client and wire schemas."""
