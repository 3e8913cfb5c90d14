"""Media loading: fetch, decode and cache images for pages and slots."""

from .loader import AssetLoader, DecodedImage, prepare_page_assets

__all__ = [
    "AssetLoader",
    "DecodedImage",
    "prepare_page_assets",
]
