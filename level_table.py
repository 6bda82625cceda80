"""
Level-Tabelle: Definitionen, Default-Tabelle und Laden aus der Konfiguration.

Eine Tabelle ist ein dict {level: LevelDefinition}. Sie wird einmal gebaut
und danach nicht mehr verändert.
"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from validator import parse_level_key, validate_levels

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when a level table is present but malformed."""

    def __init__(self, errors, source=None):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        self.source = source
        prefix = f"invalid level table ({source})" if source else "invalid level table"
        super().__init__(f"{prefix}: " + '; '.join(self.errors))


@dataclass(frozen=True)
class LevelDefinition:
    level: int
    experience_required: int
    benefits: Mapping = field(default_factory=dict)

    def __post_init__(self):
        # read-only Sicht auf eine eigene Kopie
        object.__setattr__(self, 'benefits', MappingProxyType(dict(self.benefits)))

    def get_benefit(self, name: str) -> int:
        return self.benefits.get(name, 0)

    def to_config(self) -> dict:
        return {'exp_required': self.experience_required, 'benefits': dict(self.benefits)}


def _default_levels():
    return (
        LevelDefinition(1, 0, {'max_members': 10, 'max_territory': 5}),
        LevelDefinition(2, 1000, {'max_members': 15, 'max_territory': 10, 'income_bonus': 5}),
        LevelDefinition(3, 3000, {'max_members': 20, 'max_territory': 15, 'income_bonus': 10,
                                  'influence_bonus': 5}),
        LevelDefinition(4, 7000, {'max_members': 25, 'max_territory': 20, 'income_bonus': 15,
                                  'influence_bonus': 10, 'armor_bonus': 1}),
        LevelDefinition(5, 15000, {'max_members': 30, 'max_territory': 25, 'income_bonus': 20,
                                   'influence_bonus': 15, 'armor_bonus': 2, 'strength_bonus': 1}),
    )


DEFAULT_LEVELS = MappingProxyType({d.level: d for d in _default_levels()})


def build_level_table(levels, source=None):
    """
    Baut eine Level-Tabelle aus
      - einem Mapping {level: {"exp_required": int, "benefits": {...}}} (Config-Form),
      - einem Mapping {level: LevelDefinition},
      - oder einer Liste von LevelDefinition.
    Raises ConfigurationError bei fehlerhaften Daten.
    """
    if isinstance(levels, Mapping):
        raw = {}
        for k, v in levels.items():
            if isinstance(v, LevelDefinition):
                try:
                    keyed = parse_level_key(k)
                except ValueError:
                    keyed = None
                if keyed is not None and keyed != v.level:
                    raise ConfigurationError(f"levels.{k}: key does not match definition level {v.level}", source)
                v = v.to_config()
            raw[k] = v
    elif isinstance(levels, (str, bytes)):
        raise ConfigurationError(f"levels: expected a mapping, got {type(levels).__name__}", source)
    else:
        try:
            items = list(levels)
        except TypeError:
            raise ConfigurationError(f"levels: expected a mapping, got {type(levels).__name__}", source)
        raw = {}
        for d in items:
            if not isinstance(d, LevelDefinition):
                raise ConfigurationError(f"levels: expected LevelDefinition, got {type(d).__name__}", source)
            if d.level in raw:
                raise ConfigurationError(f"levels.{d.level}: duplicate level {d.level}", source)
            raw[d.level] = d.to_config()

    valid, errors = validate_levels(raw)
    if not valid:
        logger.warning("Level table rejected (%s): %s", source or 'in-memory', errors)
        raise ConfigurationError(errors, source)

    table = {}
    for key, entry in raw.items():
        level = parse_level_key(key)
        benefits = {name: int(value) for name, value in (entry.get('benefits') or {}).items()}
        table[level] = LevelDefinition(level, int(entry['exp_required']), benefits)

    if not table:
        logger.warning("Level table (%s) defines no levels", source or 'in-memory')
    elif len(table) != max(table):
        logger.warning("Level table (%s) has gaps: %s", source or 'in-memory', sorted(table))
    return table


def levels_from_config(document, source=None):
    """
    Liefert den Abschnitt progression.levels aus einem Konfigurations-Dokument.
    None, wenn der Abschnitt fehlt (dann gelten die Defaults).
    """
    if document is None:
        return None
    if not isinstance(document, Mapping):
        raise ConfigurationError(f"config: expected a mapping, got {type(document).__name__}", source)
    progression = document.get('progression')
    if progression is None:
        return None
    if not isinstance(progression, Mapping):
        raise ConfigurationError("progression: expected a mapping", source)
    levels = progression.get('levels')
    if levels is not None and not isinstance(levels, Mapping):
        raise ConfigurationError("progression.levels: expected a mapping", source)
    return levels


def load_config_file(path):
    """Lädt ein JSON-Konfigurationsdokument. Raises ConfigurationError."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        raise ConfigurationError("file not found", str(path))
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"cannot read config: {e}", str(path))
