"""DSPy-powered meme generator with engagement tracking and meme coin minting."""

__version__ = "0.1.0"
