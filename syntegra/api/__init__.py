"""HTTP API layer: FastAPI app, routers and dependency factories."""
