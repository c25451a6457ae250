"""AOI Explorer.

Headless area-of-interest engine: locate a region by search, free-hand
drawing or GeoJSON import, inspect its vertex count, perimeter and area,
and export it as a GeoJSON file. Map rendering, file pickers and
downloads are external collaborators behind capability interfaces.
"""

__version__ = "0.1.0"
