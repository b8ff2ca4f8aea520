"""Two health checks reporting the same name."""
