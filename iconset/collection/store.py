"""
In-memory icon collection.

Holds one snapshot: prefix, icons, aliases and the optional char index.
Supports loading (with prefix normalization), mutation, alias resolution
and extraction of self-contained sub-collections.

Snapshot shape:
    {
        "prefix": "fa",
        "icons": {"arrow-left": {"body": "<path .../>", "width": 1472}},
        "aliases": {"arrow-right": {"parent": "arrow-left", "hFlip": true}},
        "chars": {"f061": "arrow-right"}
    }

Not thread safe: serialize writers (load, add_icon, add_alias, remove_icon)
or use one Collection per thread.
"""

import copy
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from iconset.collection.errors import CollectionLoadError, IconDataError
from iconset.collection.optimize import deoptimize, optimize
from iconset.collection.prefix import strip_prefix

logger = logging.getLogger(__name__)

# Longest alias chain followed before giving up (guards against cycles)
MAX_ALIAS_DEPTH = 5

ICON_DEFAULTS: Dict[str, Any] = {
    'left': 0,
    'top': 0,
    'width': 16,
    'height': 16,
    'rotate': 0,
    'hFlip': False,
    'vFlip': False,
}


def add_missing_attributes(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of icon data with every default attribute filled in.

    inlineTop/inlineHeight fall back to top/height. verticalAlign is -0.143
    for icons drawn on a 14px grid (height divisible by 7 but not by 8) and
    -0.125 otherwise.
    """
    item = dict(ICON_DEFAULTS)
    item.update(data)
    item.setdefault('inlineTop', item['top'])
    item.setdefault('inlineHeight', item['height'])
    if 'verticalAlign' not in item:
        height = item['height']
        item['verticalAlign'] = -0.143 if height % 7 == 0 and height % 8 != 0 else -0.125
    return item


def _merge_parent(result: Dict[str, Any], parent: Dict[str, Any]) -> None:
    """Merge a parent record into a flattened alias.

    Attributes already on the alias win, except rotate (summed) and
    hFlip/vFlip (xor).
    """
    for key, value in parent.items():
        if key not in result:
            result[key] = value
        elif key == 'rotate':
            result['rotate'] += value
        elif key in ('hFlip', 'vFlip'):
            result[key] = result[key] != value


class Collection:
    """Icon collection keyed by name.

    A collection created without a prefix is empty and not loaded: it lists
    nothing and rejects additions until `load` succeeds.
    """

    def __init__(self, prefix: Optional[str] = None):
        self._items: Optional[Dict[str, Any]] = (
            {'prefix': prefix, 'icons': {}} if isinstance(prefix, str) else None
        )

    def __repr__(self) -> str:
        if self._items is None:
            return "Collection(<not loaded>)"
        return (f"Collection(prefix={self.prefix!r}, icons={len(self._items['icons'])}, "
                f"aliases={len(self._items.get('aliases', {}))})")

    @property
    def prefix(self) -> Optional[str]:
        """Collection prefix, None until loaded."""
        return None if self._items is None else self._items['prefix']

    @property
    def loaded(self) -> bool:
        return self._items is not None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, data: Dict[str, Any], default_prefix: Optional[str] = None) -> None:
        """Replace the collection with a decoded snapshot.

        Hoisted attributes are pushed back into icons. When the snapshot has
        a non-empty "prefix", names are taken as already unprefixed;
        otherwise a prefix (default_prefix, or detected from the first icon)
        is validated against and stripped from every icon name, alias name,
        alias parent and char target.

        Args:
            data: Decoded snapshot; it is not modified
            default_prefix: Expected prefix for prefixed names

        Raises:
            CollectionLoadError: snapshot rejected, collection left unchanged
        """
        if not isinstance(data, dict) or not isinstance(data.get('icons'), dict):
            raise CollectionLoadError("Snapshot has no 'icons' mapping", code="MISSING_ICONS")
        if 'aliases' in data and not isinstance(data['aliases'], dict):
            raise CollectionLoadError("Snapshot 'aliases' is not a mapping", code="INVALID_ALIASES")
        for name, item in data['icons'].items():
            if not isinstance(item, dict):
                raise CollectionLoadError(f"Icon {name!r} is not a mapping", code="INVALID_ICONS")
        for name, item in data.get('aliases', {}).items():
            if not isinstance(item, dict) or not isinstance(item.get('parent'), str):
                raise CollectionLoadError(f"Alias {name!r} has no parent", code="INVALID_ALIASES")

        items = copy.deepcopy(data)
        deoptimize(items)

        prefix = items.get('prefix')
        if not isinstance(prefix, str) or prefix == '':
            try:
                strip_prefix(items, default_prefix)
            except CollectionLoadError as exc:
                logger.warning("Rejected collection: %s", exc, extra={"code": exc.code})
                raise

        shared = [name for name in items.get('aliases', {}) if name in items['icons']]
        if shared:
            exc = CollectionLoadError(
                f"Names used by both an icon and an alias: {', '.join(shared)}",
                code="DUPLICATE_NAME",
            )
            logger.warning("Rejected collection: %s", exc, extra={"code": exc.code})
            raise exc

        self._items = items
        logger.info(
            "Loaded collection %r: %d icons, %d aliases",
            items['prefix'], len(items['icons']), len(items.get('aliases', {})),
        )

    def load_json(self, text: str, default_prefix: Optional[str] = None) -> None:
        """Decode JSON text and `load` it.

        Raises:
            CollectionLoadError: invalid JSON or snapshot rejected
        """
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise CollectionLoadError(f"Invalid JSON: {exc}", code="INVALID_JSON") from exc
        self.load(data, default_prefix)

    def restore(self, items: Dict[str, Any]) -> None:
        """Install an already normalized snapshot, e.g. from a cache hit.

        Raises:
            CollectionLoadError: snapshot lacks a prefix or an icons mapping
        """
        if not isinstance(items.get('icons'), dict) or not isinstance(items.get('prefix'), str):
            raise CollectionLoadError("Snapshot is not normalized", code="MISSING_ICONS")
        self._items = copy.deepcopy(items)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _icons(self) -> Dict[str, Dict[str, Any]]:
        return {} if self._items is None else self._items['icons']

    def _aliases(self) -> Dict[str, Dict[str, Any]]:
        return {} if self._items is None else self._items.get('aliases', {})

    def _chars(self) -> Dict[str, str]:
        return {} if self._items is None else self._items.get('chars', {})

    def icon_exists(self, name: str) -> bool:
        """True if `name` is an icon or an alias."""
        return name in self._icons() or name in self._aliases()

    def list_icons(self, include_aliases: bool = False) -> List[str]:
        """Icon names in store order, then alias names when requested."""
        result = list(self._icons())
        if include_aliases:
            result.extend(self._aliases())
        return result

    def get_icon_data(self, name: str) -> Optional[Dict[str, Any]]:
        """Resolve an icon or alias into complete icon data.

        Aliases are flattened up their parent chain (see `_merge_parent`).
        A char code from the char index resolves to the icon it names.

        Returns:
            Icon data with defaults filled in, or None if the name is unknown
            or its alias chain does not reach an icon within MAX_ALIAS_DEPTH
        """
        icons = self._icons()
        aliases = self._aliases()

        if name in icons:
            return add_missing_attributes(icons[name])

        if name not in aliases:
            target = self._chars().get(name)
            if target is not None and target != name and self.icon_exists(target):
                return self.get_icon_data(target)
            return None

        result = dict(aliases[name])
        parent = result['parent']
        for _ in range(MAX_ALIAS_DEPTH):
            if parent in icons:
                _merge_parent(result, icons[parent])
                return add_missing_attributes(result)
            if parent not in aliases:
                return None
            _merge_parent(result, aliases[parent])
            parent = aliases[parent]['parent']

        logger.debug("Alias chain of %r exceeds %d levels", name, MAX_ALIAS_DEPTH)
        return None

    def get_icons(
        self,
        names: Optional[Iterable[str]] = None,
        optimized: bool = False,
        props: Optional[Iterable[str]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Export the collection, or a self-contained part of it.

        With `names`, the result holds each requested icon, or each requested
        alias together with the alias chain it needs (aliases are not
        flattened). Unknown names are skipped. Char codes are exported as
        aliases pointing at their target.

        Args:
            names: Icon/alias names to export, None for everything
            optimized: Hoist shared attributes in the result
            props: Properties optimize may hoist, default OPTIMIZABLE_PROPS

        Returns:
            New snapshot dict, or None if the collection is not loaded
        """
        if self._items is None:
            return None

        if names is None:
            result = copy.deepcopy(self._items)
        else:
            result = {'prefix': self._items['prefix'], 'icons': {}, 'aliases': {}}
            chars = self._chars()
            for name in names:
                if self._copy_into(result, name):
                    continue
                target = chars.get(name)
                if target is not None and self._copy_into(result, target):
                    result['aliases'].setdefault(name, {'parent': target})

        if optimized:
            optimize(result, props)
        return result

    def _copy_into(self, result: Dict[str, Any], name: str) -> bool:
        """Copy `name` and the alias chain it depends on into `result`.

        Past MAX_ALIAS_DEPTH the walk stops and the part copied so far counts
        as done, unlike get_icon_data which reports such chains as missing.

        Returns:
            False if the name, or a parent on its chain, does not exist
        """
        icons = self._icons()
        aliases = self._aliases()
        chain: List[str] = []
        current = name

        for _ in range(MAX_ALIAS_DEPTH + 1):
            if current in result['icons'] or current in result['aliases']:
                break
            if current in icons:
                result['icons'][current] = copy.deepcopy(icons[current])
                break
            if current not in aliases:
                return False
            chain.append(current)
            current = aliases[current]['parent']

        for alias_name in reversed(chain):
            result['aliases'][alias_name] = copy.deepcopy(aliases[alias_name])
        return True

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _register_char(self, name: str, data: Dict[str, Any]) -> None:
        char = data.pop('char', None)
        if char is not None:
            self._items.setdefault('chars', {})[str(char)] = name

    def add_icon(self, name: str, data: Dict[str, Any]) -> None:
        """Add or replace an icon.

        An alias with the same name is removed. A "char" attribute is moved
        into the char index.

        Raises:
            IconDataError: data has no body, or the collection is not loaded
        """
        if self._items is None:
            raise IconDataError("Collection has no prefix, load it or pass a prefix first")
        if not isinstance(data, dict) or 'body' not in data:
            raise IconDataError(f"Icon {name!r} has no body")

        item = copy.deepcopy(data)
        self._register_char(name, item)
        self._items['icons'][name] = item
        self._aliases().pop(name, None)
        logger.debug("Added icon %r", name)

    def add_alias(self, name: str, parent: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Add or replace an alias of an existing icon or alias.

        An icon with the same name is replaced by the alias.

        Raises:
            IconDataError: parent does not exist, name equals parent, or the
                collection is not loaded
        """
        if self._items is None:
            raise IconDataError("Collection has no prefix, load it or pass a prefix first")
        if data is not None and not isinstance(data, dict):
            raise IconDataError(f"Alias {name!r} data must be a mapping")
        if name == parent:
            raise IconDataError(f"Alias {name!r} cannot point to itself")
        if not self.icon_exists(parent):
            raise IconDataError(f"Parent {parent!r} of alias {name!r} does not exist")

        item = copy.deepcopy(data) if data else {}
        item['parent'] = parent
        self._register_char(name, item)
        self._items.setdefault('aliases', {})[name] = item
        self._items['icons'].pop(name, None)
        logger.debug("Added alias %r -> %r", name, parent)

    def remove_icon(self, name: str, cascade_aliases: bool = True) -> None:
        """Remove an icon or alias; no-op for unknown names.

        With `cascade_aliases`, every alias depending on the removed name,
        directly or through other aliases, is removed too.
        """
        if self._items is None:
            return

        pending = [name]
        removed: List[str] = []
        while pending:
            current = pending.pop()
            if current in self._items['icons']:
                del self._items['icons'][current]
            elif current in self._aliases():
                del self._items['aliases'][current]
            else:
                continue
            removed.append(current)

            if cascade_aliases:
                pending.extend(
                    key for key, alias in self._aliases().items() if alias['parent'] == current
                )

        chars = self._chars()
        for char in [c for c, target in chars.items() if target in removed]:
            del chars[char]

        if removed:
            logger.debug("Removed %d items starting at %r", len(removed), name)
