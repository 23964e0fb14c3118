"""HTTP surface for the normalizer (FastAPI app and dev server)."""
