"""
JSON-based project configuration for iconset.

Allows overriding default rendering, script-output and cache settings through:
1. .iconset.json file next to the collection being loaded
2. .iconset.json file in the current directory
3. ~/.iconset.json
4. Explicit config file path

Example .iconset.json:
{
    "render": {
        "default_height": "24px",
        "precision": 1000
    },
    "script": {
        "callback": "Iconify.addCollection",
        "pretty": true
    },
    "cache": {
        "enabled": true,
        "directory": ".cache/icons"
    },
    "collection": {
        "optimize_props": ["width", "height"]
    }
}
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from iconset.collection.optimize import OPTIMIZABLE_PROPS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".iconset.json"


@dataclass
class RenderConfig:
    """SVG rendering defaults."""
    default_height: str = "1em"  # used when neither width nor height is requested
    precision: int = 100  # rounding precision for derived dimensions
    add_extra: bool = False  # emit pass-through attributes on <svg>
    id_prefix: str = "svg-icon"


@dataclass
class ScriptConfig:
    """Script-wrapped JSON output."""
    callback: str = "SimpleSVG.addCollection"
    optimize: bool = False
    pretty: bool = False


@dataclass
class CacheConfig:
    """Persisted-snapshot cache settings."""
    enabled: bool = False
    directory: str = ""  # empty = next to the source file
    schema_version: int = 1


@dataclass
class CollectionConfig:
    """Collection storage settings."""
    optimize_props: List[str] = field(default_factory=lambda: list(OPTIMIZABLE_PROPS))


_SECTIONS = ('render', 'script', 'cache', 'collection')


@dataclass
class IconsetConfig:
    """Complete project configuration."""
    render: RenderConfig = field(default_factory=RenderConfig)
    script: ScriptConfig = field(default_factory=ScriptConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    collection: CollectionConfig = field(default_factory=CollectionConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def save(self, path: Union[str, Path]) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_json())
        logger.info("Configuration saved to %s", path)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'IconsetConfig':
        """Create configuration from dictionary.

        Unknown sections and keys are ignored, as are `_comment` style keys.

        Args:
            data: Configuration dictionary

        Returns:
            IconsetConfig instance
        """
        config = cls()
        for section_name in _SECTIONS:
            values = data.get(section_name)
            if not isinstance(values, dict):
                continue
            section = getattr(config, section_name)
            for key, value in values.items():
                if hasattr(section, key):
                    setattr(section, key, value)
        return config

    @classmethod
    def from_json(cls, json_str: str) -> 'IconsetConfig':
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'IconsetConfig':
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist
            json.JSONDecodeError: If file is not valid JSON
        """
        path = Path(path)
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        logger.info("Configuration loaded from %s", path)
        return cls.from_dict(data)


def find_config_file(
    collection_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> Optional[Path]:
    """Find configuration file using search hierarchy.

    Search order:
    1. Explicit config path (if provided)
    2. .iconset.json in the collection file's directory
    3. .iconset.json in current working directory
    4. ~/.iconset.json in user's home directory

    Returns:
        Path to config file if found, None otherwise
    """
    if explicit_config:
        explicit = Path(explicit_config)
        if explicit.exists():
            return explicit
        logger.warning("Explicit config not found: %s", explicit)

    candidates = []
    if collection_path:
        candidates.append(Path(collection_path).parent / CONFIG_FILENAME)
    candidates.append(Path.cwd() / CONFIG_FILENAME)
    candidates.append(Path.home() / CONFIG_FILENAME)

    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def load_config(
    collection_path: Optional[Union[str, Path]] = None,
    explicit_config: Optional[Union[str, Path]] = None,
) -> IconsetConfig:
    """Load configuration with fallback to defaults."""
    config_path = find_config_file(collection_path, explicit_config)

    if config_path:
        try:
            return IconsetConfig.load(config_path)
        except (json.JSONDecodeError, IOError) as e:
            logger.error("Failed to load config %s: %s", config_path, e)

    return IconsetConfig()


def merge_configs(base: IconsetConfig, override: IconsetConfig) -> IconsetConfig:
    """Merge two configurations, with override taking precedence.

    Only values that differ from the built-in defaults are taken from override.
    """
    merged = IconsetConfig.from_dict(base.to_dict())
    defaults = IconsetConfig()

    for section_name in _SECTIONS:
        override_section = getattr(override, section_name)
        default_section = getattr(defaults, section_name)
        merged_section = getattr(merged, section_name)
        for f in fields(override_section):
            value = getattr(override_section, f.name)
            if value != getattr(default_section, f.name):
                setattr(merged_section, f.name, value)

    return merged


def create_sample_config(path: Union[str, Path] = CONFIG_FILENAME) -> None:
    """Create a sample configuration file with documentation."""
    sample = IconsetConfig().to_dict()
    sample["_comment"] = "iconset project configuration"
    sample["render"]["_comment"] = "Defaults applied when rendering <svg> markup"
    sample["script"]["_comment"] = "callback(JSON) script output"
    sample["cache"]["_comment"] = "Pre-parsed snapshot cache, keyed by source file mtime"

    path = Path(path)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(sample, f, indent=2, ensure_ascii=False)

    logger.info("Sample configuration created: %s", path)
