"""File loading, snapshot cache, script output and integrity checks."""

from iconset.io.cache import CACHE_SCHEMA_VERSION, SnapshotCache
from iconset.io.json_loader import (
    default_prefix_from_filename,
    find_collection_file,
    load_collection_file,
    load_named_collection,
)
from iconset.io.script import scriptify
from iconset.io.validator import (
    ValidationIssue,
    ValidationReport,
    ValidationSeverity,
    validate_collection,
)

__all__ = [
    "CACHE_SCHEMA_VERSION",
    "SnapshotCache",
    "ValidationIssue",
    "ValidationReport",
    "ValidationSeverity",
    "default_prefix_from_filename",
    "find_collection_file",
    "load_collection_file",
    "load_named_collection",
    "scriptify",
    "validate_collection",
]
