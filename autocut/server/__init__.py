"""HTTP API for the cut engine (FastAPI)."""
