"""Artifact Showcase: index AI-generated UI components and serve them for browsing."""

__version__ = "0.1.0"
