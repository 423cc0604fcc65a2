"""
Hoisting of attributes shared by all icons in a collection snapshot.

`optimize` moves the most common value of a property to the top level of the
snapshot and removes it from every icon carrying that value. `deoptimize`
pushes hoisted values back into the icons. Both work in place.

HOISTABLE_PROPS is the single list of attributes that may live at the top
level. `optimize` never hoists anything outside it and `deoptimize` restores
all of it, so structural fields such as `prefix`, `icons`, `aliases` and
`chars` are never touched and every optimized snapshot loads back intact.
"""

import logging
from collections import Counter
from typing import Any, Dict, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)

# Hoisted by default
OPTIMIZABLE_PROPS: Tuple[str, ...] = (
    'width',
    'height',
    'top',
    'left',
    'inlineHeight',
    'inlineTop',
    'verticalAlign',
)

# Every scalar icon attribute; a custom `props` list is limited to these
HOISTABLE_PROPS: Tuple[str, ...] = OPTIMIZABLE_PROPS + ('rotate', 'hFlip', 'vFlip')


def _value_key(value: Any) -> Tuple[bool, Any]:
    # True == 1 in Python; keep booleans apart from numbers
    return isinstance(value, bool), value


def optimize(snapshot: Dict[str, Any], props: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Hoist values shared by several icons to the top level of `snapshot`.

    A property is skipped unless every icon defines it. The most frequent
    value wins (ties go to the value seen first) and is hoisted only when at
    least two icons share it. Icons holding a different value keep theirs.

    An empty `aliases` mapping is dropped.

    Args:
        snapshot: Collection snapshot, modified in place
        props: Properties to consider, default OPTIMIZABLE_PROPS; names
            outside HOISTABLE_PROPS are ignored

    Returns:
        The same snapshot, for chaining
    """
    if props is None:
        props = OPTIMIZABLE_PROPS
    else:
        props = tuple(props)
        ignored = [p for p in props if p not in HOISTABLE_PROPS]
        if ignored:
            logger.warning("Not hoisting unknown attributes: %s", ", ".join(ignored))
            props = tuple(p for p in props if p in HOISTABLE_PROPS)

    if 'aliases' in snapshot and not snapshot['aliases']:
        del snapshot['aliases']

    icons: Dict[str, Dict[str, Any]] = snapshot.get('icons', {})
    if not icons:
        return snapshot

    for prop in props:
        if any(prop not in item for item in icons.values()):
            continue

        counts = Counter(_value_key(item[prop]) for item in icons.values())
        # Counter keeps insertion order, so max() settles ties on first occurrence
        best_key, best_count = max(counts.items(), key=lambda kv: kv[1])
        if best_count < 2:
            continue

        snapshot[prop] = best_key[1]
        for item in icons.values():
            if _value_key(item[prop]) == best_key:
                del item[prop]

        logger.debug("Hoisted %s=%r shared by %d icons", prop, best_key[1], best_count)

    return snapshot


def deoptimize(snapshot: Dict[str, Any], props: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Restore hoisted values into every icon that lacks its own value.

    Args:
        snapshot: Collection snapshot, modified in place
        props: Properties that may have been hoisted, default HOISTABLE_PROPS

    Returns:
        The same snapshot, for chaining
    """
    props = HOISTABLE_PROPS if props is None else tuple(props)
    icons: Dict[str, Dict[str, Any]] = snapshot.get('icons', {})

    for prop in props:
        if prop not in snapshot:
            continue
        value = snapshot.pop(prop)
        for item in icons.values():
            if prop not in item:
                item[prop] = value

    return snapshot
