"""Icon collection: storage, prefix normalization, alias resolution, attribute hoisting."""

from iconset.collection.errors import CollectionLoadError, IconDataError
from iconset.collection.optimize import (
    HOISTABLE_PROPS,
    OPTIMIZABLE_PROPS,
    deoptimize,
    optimize,
)
from iconset.collection.store import (
    MAX_ALIAS_DEPTH,
    Collection,
    add_missing_attributes,
)

__all__ = [
    "Collection",
    "CollectionLoadError",
    "HOISTABLE_PROPS",
    "IconDataError",
    "MAX_ALIAS_DEPTH",
    "OPTIMIZABLE_PROPS",
    "add_missing_attributes",
    "deoptimize",
    "optimize",
]
