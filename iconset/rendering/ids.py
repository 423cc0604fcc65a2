"""
Unique ids for elements inside icon bodies.

Several copies of one icon on a page would otherwise share ids such as
gradient or clip-path ids. Bodies are not parsed: ids are found with a regular
expression and rewritten through an exact-string replacement table covering
id="x", href="#x" and url(#x) style references.
"""

import re
import secrets
import time
from typing import Dict

_ID_ATTRIBUTE = re.compile(r'\sid="(\S+)"')


def _unique_prefix(prefix: str) -> str:
    return f"{prefix}-{int(time.time()):x}-{secrets.token_hex(3)}-"


def replace_ids(body: str, prefix: str = "svg-icon") -> str:
    """Replace every id defined in `body`, and references to it, with a fresh id.

    Returns:
        Body with new ids; unchanged if it defines none
    """
    ids = list(dict.fromkeys(_ID_ATTRIBUTE.findall(body)))
    if not ids:
        return body

    base = _unique_prefix(prefix)
    replacements: Dict[str, str] = {}
    for counter, old_id in enumerate(ids, start=1):
        new_id = f"{base}{counter}"
        replacements[f'="{old_id}"'] = f'="{new_id}"'
        replacements[f'="#{old_id}"'] = f'="#{new_id}"'
        replacements[f'(#{old_id})'] = f'(#{new_id})'

    # Longest keys first so that "a" never shadows "ab"
    pattern = re.compile("|".join(
        re.escape(key) for key in sorted(replacements, key=len, reverse=True)
    ))
    return pattern.sub(lambda m: replacements[m.group(0)], body)
