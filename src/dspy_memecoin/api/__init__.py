"""FastAPI application for the meme coin creator."""
