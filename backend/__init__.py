"""Backend package exposing the FastAPI application (see ``backend.main``)."""
