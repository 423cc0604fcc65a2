"""
iconset: icon collections with aliases, compact storage and SVG rendering.

    from iconset import Collection, IconSVG

    collection = Collection()
    collection.load_json(text)
    svg = IconSVG.from_collection(collection, "arrow-right").get_svg({"height": 24})
"""

from iconset.collection import (
    Collection,
    CollectionLoadError,
    IconDataError,
    add_missing_attributes,
    deoptimize,
    optimize,
)
from iconset.logging_config import (
    get_logger,
    log_timing,
    setup_logging,
    timed,
)
from iconset.rendering import IconSVG, calculate_dimension

__version__ = "0.1.0"

__all__ = [
    "Collection",
    "CollectionLoadError",
    "IconDataError",
    "IconSVG",
    "add_missing_attributes",
    "calculate_dimension",
    "deoptimize",
    "get_logger",
    "log_timing",
    "optimize",
    "setup_logging",
    "timed",
]
