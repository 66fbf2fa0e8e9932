"""Domain core: generation pipeline and exception hierarchy."""
