"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Zoom bounds, default view, basemap tile sources
- exceptions: Custom exception hierarchy
"""
