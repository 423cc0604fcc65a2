"""
Script-wrapped collection output: `callback({...});`.

The JSON is passed to a JavaScript function that registers the collection
with an icon loader on the page.
"""

import json
import logging
from typing import Iterable, Optional

from iconset.collection.store import Collection
from iconset.project_config import IconsetConfig

logger = logging.getLogger(__name__)


def scriptify(
    collection: Collection,
    icons: Optional[Iterable[str]] = None,
    callback: Optional[str] = None,
    optimize: Optional[bool] = None,
    pretty: Optional[bool] = None,
    config: Optional[IconsetConfig] = None,
) -> str:
    """Serialize a collection (or part of it) as a JavaScript call.

    Options left as None come from `config.script`; optimization hoists
    `config.collection.optimize_props`.

    Args:
        collection: Source collection
        icons: Names to include, None for all
        callback: JavaScript function name
        optimize: Hoist shared attributes
        pretty: Indent the JSON
        config: Project configuration, defaults if None

    Returns:
        "callback(<json>);\\n", or "" if the collection is not loaded
    """
    config = config or IconsetConfig()
    callback = config.script.callback if callback is None else callback
    optimize = config.script.optimize if optimize is None else optimize
    pretty = config.script.pretty if pretty is None else pretty

    data = collection.get_icons(icons, optimize, config.collection.optimize_props)
    if data is None:
        logger.warning("Cannot scriptify a collection that is not loaded")
        return ''

    if pretty:
        text = json.dumps(data, indent=4, ensure_ascii=False)
    else:
        text = json.dumps(data, separators=(',', ':'), ensure_ascii=False)

    return f"{callback}({text});\n"
