"""Render requests, pipe sprites and the Pillow preview renderer."""
