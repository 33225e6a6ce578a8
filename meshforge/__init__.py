"""Meshes for 3D primitives and Bezier patches, model files, XML scenes and their animation."""

__version__ = "0.1.0"