"""Post-stream side-channel extraction (links and memory directives)."""

from .directives import parse_directives, store_directives
from .extractor import SideChannelExtractor
from .links import is_product_url, name_from_url

__all__ = [
    "SideChannelExtractor",
    "parse_directives",
    "store_directives",
    "is_product_url",
    "name_from_url",
]
