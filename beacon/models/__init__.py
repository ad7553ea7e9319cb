from .pixel_hit import PixelHit

__all__ = [
    "PixelHit",
]
