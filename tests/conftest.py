"""
Pytest configuration and fixtures for iconset.

Provides:
- A small FontAwesome-like collection (plain, optimized and prefixed forms)
- Collection fixtures built from it
- Temporary collection files
- Common assertion helpers
"""

import copy
import json
import re
from pathlib import Path
from typing import Any, Dict

import pytest

from iconset.collection.store import Collection


# ============================================================================
# Icon bodies
# ============================================================================

BODY_ARROW_CIRCLE_LEFT = '<path d="M1280 832V704q0-26-19-45H714l189-189z" fill="currentColor"/>'
BODY_ARROW_UP = '<path d="M1611 832q0 53-37 90l-75 75q-38 38-91 38z" fill="currentColor"/>'
BODY_ARROW_LEFT = '<path d="M1472 736v128q0 53-32.5 90.5T1355 992H651z" fill="currentColor"/>'
BODY_ARROWS = '<path d="M1792 896q0 26-19 45l-256 256q-19 19-45 19z" fill="currentColor"/>'
BODY_ASTERISK = '<path d="M1386 922q46 26 59.5 77.5T1433 1097l-64 110z" fill="currentColor"/>'
BODY_AT = '<path d="M972 647q0-108-53.5-169T771 417q-63 0-124 30.5z" fill="currentColor"/>'


def _fa_icons() -> Dict[str, Dict[str, Any]]:
    return {
        'arrow-circle-left': {
            'body': BODY_ARROW_CIRCLE_LEFT,
            'width': 1536, 'height': 1536,
            'inlineHeight': 1792, 'inlineTop': -128, 'verticalAlign': -0.143,
        },
        'arrow-up': {
            'body': BODY_ARROW_UP,
            'width': 1664, 'height': 1536,
            'inlineHeight': 1792, 'inlineTop': -128, 'verticalAlign': -0.143,
        },
        'arrow-left': {
            'body': BODY_ARROW_LEFT,
            'width': 1472, 'height': 1600,
            'inlineHeight': 1792, 'inlineTop': -160, 'verticalAlign': -0.143,
        },
        'arrows': {
            'body': BODY_ARROWS,
            'width': 1792, 'height': 1792,
            'inlineHeight': 1792, 'inlineTop': 0, 'verticalAlign': -0.143,
        },
        'asterisk': {
            'body': BODY_ASTERISK,
            'width': 1472, 'height': 1536,
            'inlineHeight': 1792, 'inlineTop': -128, 'verticalAlign': -0.143,
        },
        'at': {
            'body': BODY_AT,
            'width': 1536, 'height': 1536,
            'inlineHeight': 1792, 'inlineTop': -128, 'verticalAlign': -0.143,
        },
    }


def _fa_aliases() -> Dict[str, Dict[str, Any]]:
    return {
        'arrow-circle-right': {'parent': 'arrow-circle-left', 'hFlip': True},
        'arrow-down': {'parent': 'arrow-up', 'vFlip': True},
        'arrow-right': {'parent': 'arrow-left', 'hFlip': True},
    }


FA_ICON_NAMES = ['arrow-circle-left', 'arrow-up', 'arrow-left', 'arrows', 'asterisk', 'at']
FA_ALIAS_NAMES = ['arrow-circle-right', 'arrow-down', 'arrow-right']


# ============================================================================
# Snapshot Fixtures
# ============================================================================

@pytest.fixture
def fa_data() -> Dict[str, Any]:
    """Unoptimized collection with prefix, aliases and a char index."""
    return {
        'prefix': 'fa',
        'icons': _fa_icons(),
        'aliases': _fa_aliases(),
        'chars': {'f061': 'arrow-right', 'f0a9': 'arrow-circle-right'},
    }


@pytest.fixture
def fa_optimized_data() -> Dict[str, Any]:
    """fa_data after hoisting shared attributes."""
    return {
        'prefix': 'fa',
        'icons': {
            'arrow-circle-left': {'body': BODY_ARROW_CIRCLE_LEFT},
            'arrow-up': {'body': BODY_ARROW_UP, 'width': 1664},
            'arrow-left': {'body': BODY_ARROW_LEFT, 'width': 1472, 'height': 1600, 'inlineTop': -160},
            'arrows': {'body': BODY_ARROWS, 'width': 1792, 'height': 1792, 'inlineTop': 0},
            'asterisk': {'body': BODY_ASTERISK, 'width': 1472},
            'at': {'body': BODY_AT},
        },
        'aliases': _fa_aliases(),
        'chars': {'f061': 'arrow-right', 'f0a9': 'arrow-circle-right'},
        'width': 1536,
        'height': 1536,
        'inlineHeight': 1792,
        'inlineTop': -128,
        'verticalAlign': -0.143,
    }


@pytest.fixture
def fa_prefixed_data(fa_data) -> Dict[str, Any]:
    """fa_data without a prefix field, every name written as "fa-<name>"."""
    return {
        'icons': {f"fa-{name}": item for name, item in fa_data['icons'].items()},
        'aliases': {
            f"fa-{name}": dict(item, parent=f"fa-{item['parent']}")
            for name, item in fa_data['aliases'].items()
        },
    }


# ============================================================================
# Collection Fixtures
# ============================================================================

@pytest.fixture
def fa_collection(fa_data) -> Collection:
    """Loaded collection built from fa_data."""
    collection = Collection()
    collection.load(copy.deepcopy(fa_data))
    return collection


@pytest.fixture
def fa_collection_optimized(fa_optimized_data) -> Collection:
    """Loaded collection built from fa_optimized_data."""
    collection = Collection()
    collection.load(fa_optimized_data)
    return collection


@pytest.fixture
def deep_alias_collection() -> Collection:
    """Collection with an alias chain a1 -> a2 -> ... -> a6 -> icon.

    a2 sits 5 aliases away from the icon, a1 sits 6 away.
    """
    collection = Collection('deep')
    collection.add_icon('icon', {'body': '<g />', 'width': 20, 'height': 24})
    parent = 'icon'
    for level in range(6, 0, -1):
        name = f"a{level}"
        collection.add_alias(name, parent, {'rotate': 1})
        parent = name
    return collection


# ============================================================================
# Temporary File Fixtures
# ============================================================================

@pytest.fixture
def fa_json_path(tmp_path: Path, fa_prefixed_data) -> Path:
    """fa_prefixed_data written to fa.json (prefix comes from the file name)."""
    path = tmp_path / "fa.json"
    path.write_text(json.dumps(fa_prefixed_data), encoding='utf-8')
    return path


@pytest.fixture
def tmp_cache_path(tmp_path: Path) -> Path:
    """Temporary path for a snapshot cache file."""
    return tmp_path / "cache" / "fa.cache.json"


# ============================================================================
# Assertion Helpers
# ============================================================================

ID_PATTERN = re.compile(r'\sid="([^"]+)"')


def assert_svg_attribute(svg: str, name: str, value: str) -> None:
    """Assert that the markup carries name="value"."""
    assert f' {name}="{value}"' in svg, f"{name}={value!r} not found in {svg}"


def assert_all_icons_have(snapshot: Dict[str, Any], *props: str) -> None:
    """Assert that every icon of a snapshot defines the given properties."""
    for name, item in snapshot['icons'].items():
        for prop in props:
            assert prop in item, f"{name} lacks {prop}"
