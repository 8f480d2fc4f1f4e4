"""FastAPI surface for mdcompose."""
