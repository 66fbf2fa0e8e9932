"""HTTP API: FastAPI app factory, routers and dependency injection."""
