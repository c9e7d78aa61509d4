"""Spotify Connect building blocks: metadata models, discovery and audio sinks."""

__version__ = "0.1.0"