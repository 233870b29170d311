"""API REST GeekFlex (FastAPI)."""
