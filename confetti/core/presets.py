"""
Confetti Presets - Named burst configurations

Built-in presets cover common celebrations. Users can add their own as YAML
files in a presets directory (default: ~/.confetti/presets); the directory is
only read, never created or written.

A user preset file holds either a single preset (named after the file):

    description: Slow golden drizzle
    tags: [gold, gentle]
    emission_frequency: 0.1
    colors: ["#FFD700", "#DAA520"]

or several under a ``presets`` key:

    presets:
      drizzle:
        emission_frequency: 0.1
      storm:
        emission_frequency: 0.9
"""

import logging
import math
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import ConfettiConfig
from .palette import GOLD_COLORS, PARTY_COLORS


logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class ConfettiPreset:
    """A named configuration with metadata for browsing"""

    name: str
    config: ConfettiConfig = field(default_factory=ConfettiConfig)
    description: str = ""
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConfettiPreset':
        """Create from dictionary; metadata keys are split from config fields"""
        data = dict(data)
        name = data.pop('name')
        description = data.pop('description', "")
        tags = list(data.pop('tags', []) or [])
        return cls(
            name=name,
            config=ConfettiConfig.from_dict(data),
            description=description,
            tags=tags,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {'name': self.name, 'description': self.description, 'tags': list(self.tags)}
        data.update(self.config.to_dict())
        return data


# ============================================================================
# Built-in Presets
# ============================================================================

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "celebration": {
        "name": "celebration",
        "description": "Classic burst shot straight down from the top of the screen",
        "emission_frequency": 0.05,
        "number_of_particles": 20,
        "min_blast_force": 5.0,
        "max_blast_force": 20.0,
        "blast_direction": math.pi / 2,
        "blast_directionality": "directional",
        "colors": PARTY_COLORS,
        "gravity": 0.1,
        "tags": ["party", "default"],
    },

    "explosion": {
        "name": "explosion",
        "description": "Single dense pop in every direction",
        "emission_frequency": 0.0,
        "number_of_particles": 50,
        "min_blast_force": 10.0,
        "max_blast_force": 40.0,
        "blast_directionality": "explosive",
        "particle_drag": 0.08,
        "gravity": 0.3,
        "tags": ["party", "burst"],
    },

    "fountain": {
        "name": "fountain",
        "description": "Steady upward stream, like a party popper held upright",
        "emission_frequency": 0.6,
        "number_of_particles": 5,
        "min_blast_force": 15.0,
        "max_blast_force": 30.0,
        "blast_direction": -math.pi / 2,
        "blast_directionality": "directional",
        "colors": PARTY_COLORS,
        "particle_drag": 0.05,
        "gravity": 0.25,
        "tags": ["party", "stream"],
    },

    "side_cannon_left": {
        "name": "side_cannon_left",
        "description": "Cannon firing right from the left edge",
        "emission_frequency": 0.1,
        "number_of_particles": 15,
        "min_blast_force": 20.0,
        "max_blast_force": 35.0,
        "blast_direction": -math.pi / 4,
        "blast_directionality": "directional",
        "gravity": 0.3,
        "tags": ["cannon", "stream"],
    },

    "side_cannon_right": {
        "name": "side_cannon_right",
        "description": "Cannon firing left from the right edge",
        "emission_frequency": 0.1,
        "number_of_particles": 15,
        "min_blast_force": 20.0,
        "max_blast_force": 35.0,
        "blast_direction": -3 * math.pi / 4,
        "blast_directionality": "directional",
        "gravity": 0.3,
        "tags": ["cannon", "stream"],
    },

    "gold_rain": {
        "name": "gold_rain",
        "description": "Slow golden drizzle from above",
        "emission_frequency": 0.15,
        "number_of_particles": 4,
        "min_blast_force": 1.0,
        "max_blast_force": 3.0,
        "blast_direction": math.pi / 2,
        "blast_directionality": "directional",
        "colors": GOLD_COLORS,
        "minimum_size": (10.0, 5.0),
        "maximum_size": (16.0, 8.0),
        "particle_drag": 0.1,
        "gravity": 0.05,
        "tags": ["gold", "gentle"],
    },

    "confetti_storm": {
        "name": "confetti_storm",
        "description": "Relentless random-colored barrage",
        "emission_frequency": 0.9,
        "number_of_particles": 10,
        "min_blast_force": 5.0,
        "max_blast_force": 25.0,
        "blast_directionality": "explosive",
        "gravity": 0.4,
        "tags": ["intense", "stream"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Looks up built-in and user presets by name.
    User presets override built-in presets with the same name.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        self.user_presets_dir = Path(user_presets_dir) if user_presets_dir else Path.home() / '.confetti' / 'presets'

        self._builtin: Dict[str, ConfettiPreset] = {}
        self._user: Dict[str, ConfettiPreset] = {}

        self._load_builtin_presets()
        self._load_user_presets()

    def _load_builtin_presets(self) -> None:
        for name, data in BUILTIN_PRESETS.items():
            self._builtin[name] = ConfettiPreset.from_dict(data)

    def _load_user_presets(self) -> None:
        if not self.user_presets_dir.is_dir():
            return

        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                with open(yaml_file, 'r') as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Could not load preset file %s: %s", yaml_file, e)
                continue

            if not isinstance(data, dict):
                logger.warning("Skipping preset file %s: expected a mapping", yaml_file)
                continue

            if 'presets' not in data:
                self._add_user_preset(yaml_file, yaml_file.stem, data)
                continue

            entries = data['presets']
            if not isinstance(entries, dict):
                logger.warning("Skipping preset file %s: 'presets' must be a mapping", yaml_file)
                continue

            # Each entry stands alone; one bad preset does not drop its neighbours
            for name, preset_data in entries.items():
                self._add_user_preset(yaml_file, name, preset_data or {})

    def _add_user_preset(self, yaml_file: Path, name: str, data: Any) -> None:
        try:
            self._user[name] = ConfettiPreset.from_dict(dict(data, name=name))
        except (ValueError, TypeError) as e:
            logger.warning("Skipping preset '%s' in %s: %s", name, yaml_file, e)

    def get(self, name: str) -> Optional[ConfettiPreset]:
        return self._user.get(name) or self._builtin.get(name)

    def get_config(self, name: str) -> ConfettiConfig:
        """Config for a preset, raising ValueError for unknown names"""
        preset = self.get(name)
        if preset is None:
            available = ', '.join(self.list_all())
            raise ValueError(f"Unknown preset '{name}'. Available: {available}")
        return preset.config

    def exists(self, name: str) -> bool:
        return name in self._user or name in self._builtin

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin and name not in self._user

    def list_all(self) -> List[str]:
        return sorted(set(self._builtin) | set(self._user))

    def list_by_tag(self, tag: str) -> List[str]:
        matches = []
        for name, preset in {**self._builtin, **self._user}.items():
            if tag.lower() in [t.lower() for t in preset.tags]:
                matches.append(name)
        return sorted(matches)

    def list_tags(self) -> List[str]:
        tags = set()
        for preset in {**self._builtin, **self._user}.values():
            tags.update(preset.tags)
        return sorted(tags)

    def search(self, query: str) -> List[str]:
        """Search presets by name, description, or tags"""
        query = query.lower()
        matches = []

        for name, preset in {**self._builtin, **self._user}.items():
            if (query in name.lower() or
                    query in preset.description.lower() or
                    any(query in tag.lower() for tag in preset.tags)):
                matches.append(name)

        return sorted(matches)


# ============================================================================
# Global Instance & Convenience Functions
# ============================================================================

_manager: Optional[PresetManager] = None


def get_preset_manager() -> PresetManager:
    """Get or create global preset manager"""
    global _manager
    if _manager is None:
        _manager = PresetManager()
    return _manager


def get_preset(name: str) -> Optional[ConfettiPreset]:
    return get_preset_manager().get(name)


def list_presets(tag: Optional[str] = None) -> List[str]:
    manager = get_preset_manager()
    if tag:
        return manager.list_by_tag(tag)
    return manager.list_all()
