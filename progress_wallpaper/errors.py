class WallpaperError(Exception):
    """Base error."""


class RasterizeError(WallpaperError):
    """Raised when a scene cannot be turned into a raster image."""
