"""
Loading icon collections from JSON files.

The file name supplies the default prefix: "fa.json" and "fa.min.json" both
expect icons named "fa-..." or "fa:..." unless the file declares a prefix.
An optional snapshot cache, keyed by the source path and its mtime, lets
repeated loads skip decoding.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from iconset.collection.errors import CollectionLoadError
from iconset.collection.store import Collection
from iconset.io.cache import SnapshotCache
from iconset.logging_config import log_timing
from iconset.project_config import IconsetConfig

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def default_prefix_from_filename(path: PathLike) -> str:
    """File name up to the first dot, for both / and \\ separated paths."""
    name = str(path).replace('\\', '/').rsplit('/', 1)[-1]
    return name.split('.', 1)[0]


def cache_path_for(path: PathLike, config: IconsetConfig) -> Path:
    """Cache file location for a collection file under the given config."""
    path = Path(path)
    directory = Path(config.cache.directory) if config.cache.directory else path.parent
    return directory / f"{path.name}.cache.json"


def load_collection_file(
    path: PathLike,
    cache_file: Optional[PathLike] = None,
    config: Optional[IconsetConfig] = None,
) -> Collection:
    """Load a collection from a JSON file.

    Args:
        path: Collection JSON file
        cache_file: Snapshot cache to read/write; derived from config when
            caching is enabled there and no file is given
        config: Project configuration, defaults if None

    Returns:
        Loaded Collection

    Raises:
        CollectionLoadError: file missing, unreadable or rejected; cache
            failures only log a warning
    """
    config = config or IconsetConfig()
    path = Path(path)

    try:
        mtime = os.path.getmtime(path)
    except OSError as exc:
        raise CollectionLoadError(f"Collection file not found: {path}", code="FILE_NOT_FOUND") from exc

    if cache_file is None and config.cache.enabled:
        cache_file = cache_path_for(path, config)
    cache = SnapshotCache(cache_file, config.cache.schema_version) if cache_file is not None else None
    key = str(path.resolve())

    collection = Collection()

    if cache is not None:
        items = cache.load(key, mtime)
        if items is not None:
            try:
                collection.restore(items)
            except CollectionLoadError as exc:
                logger.warning("Ignoring cache %s: %s", cache.path, exc)
            else:
                logger.info("Loaded %s from cache %s", path.name, cache.path)
                return collection

    with log_timing(logger, "Loading collection file", path=str(path)):
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            raise CollectionLoadError(f"Cannot read {path}: {exc}", code="FILE_NOT_FOUND") from exc
        collection.load_json(text, default_prefix_from_filename(path))

    if cache is not None:
        try:
            cache.save(key, mtime, collection.get_icons())
        except OSError as exc:
            logger.warning("Cannot write cache %s: %s", cache.path, exc)

    return collection


def find_collection_file(name: str, directory: PathLike) -> Path:
    """Path of collection `name` inside a directory of collection packages.

    Collections are stored as <directory>/json/<name>.json.
    """
    return Path(directory) / 'json' / f"{name}.json"


def load_named_collection(
    name: str,
    directory: PathLike,
    config: Optional[IconsetConfig] = None,
) -> Collection:
    """Load collection `name` from a directory of collection packages."""
    return load_collection_file(find_collection_file(name, directory), config=config)
