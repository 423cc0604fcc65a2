"""
Prefix detection and stripping for collections whose names carry a prefix.

Raw names look like "mdi:home" or "mdi-home". A "-" separator is accepted only
when the prefix itself has no "-", otherwise "foo-bar-baz" would be ambiguous.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from iconset.collection.errors import CollectionLoadError

logger = logging.getLogger(__name__)


def detect_prefix(first_name: str) -> str:
    """Derive the prefix from a single prefixed icon name.

    "prefix:name" gives "prefix"; otherwise "prefix-name[-more]" gives "prefix".

    Raises:
        CollectionLoadError: if the name has neither separator
    """
    parts = first_name.split(':')
    if len(parts) == 2:
        return parts[0]

    parts = first_name.split('-')
    if len(parts) < 2:
        raise CollectionLoadError(
            f"Cannot detect prefix from icon name {first_name!r}",
            code="PREFIX_UNDETECTED",
        )
    return parts[0]


def accepted_separators(prefix: str) -> Tuple[str, ...]:
    """Return the prefix+separator strings names may start with."""
    if '-' in prefix:
        return (prefix + ':',)
    return (prefix + ':', prefix + '-')


def _strip(name: str, prefix_len: int, accepted: Tuple[str, ...], what: str) -> str:
    head = name[:prefix_len + 1]
    if head not in accepted:
        raise CollectionLoadError(
            f"{what} {name!r} does not start with {' or '.join(repr(a) for a in accepted)}",
            code="PREFIX_MISMATCH",
        )
    return name[prefix_len + 1:]


def strip_prefix(data: Dict[str, Any], default_prefix: Optional[str] = None) -> str:
    """Strip a shared prefix from every icon, alias, parent and char target.

    `data` is modified in place; callers pass a private copy so that a
    failure part-way through leaves nothing observable.

    Args:
        data: Snapshot without a usable "prefix" field
        default_prefix: Prefix to expect; detected from the first icon if None

    Returns:
        The prefix, also stored as data["prefix"]

    Raises:
        CollectionLoadError: prefix cannot be detected or a name does not match
    """
    if default_prefix is None:
        if not data['icons']:
            raise CollectionLoadError(
                "Cannot detect prefix of an empty collection",
                code="PREFIX_UNDETECTED",
            )
        prefix = detect_prefix(next(iter(data['icons'])))
    else:
        prefix = default_prefix

    accepted = accepted_separators(prefix)
    size = len(prefix)

    for section in ('icons', 'aliases'):
        if section not in data:
            continue
        stripped: Dict[str, Any] = {}
        for name, item in data[section].items():
            key = _strip(name, size, accepted, "Name")
            if key in stripped:
                raise CollectionLoadError(
                    f"{name!r} and another name both become {key!r}",
                    code="DUPLICATE_NAME",
                )
            if isinstance(item, dict) and 'parent' in item:
                item['parent'] = _strip(item['parent'], size, accepted, f"Parent of {name!r}")
            stripped[key] = item
        data[section] = stripped

    if isinstance(data.get('chars'), dict):
        data['chars'] = {
            char: _strip(target, size, accepted, f"Target of char {char!r}")
            for char, target in data['chars'].items()
        }

    data['prefix'] = prefix
    logger.debug("Stripped prefix %r from %d icons", prefix, len(data['icons']))
    return prefix
