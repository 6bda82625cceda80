"""
Clan-Progression: Erfahrung sammeln, Level bestimmen, Boni nachschlagen.

Die Level-Tabelle wird beim Erzeugen der Engine einmal gebaut und danach
nur gelesen. Den ClanProgressState besitzt der Aufrufer; die Engine liest
ihn und aktualisiert experience/level nur in add_experience.
"""

import logging
from dataclasses import dataclass

import config
import level_utils
from level_table import (
    DEFAULT_LEVELS,
    ConfigurationError,
    build_level_table,
    levels_from_config,
    load_config_file,
)

logger = logging.getLogger(__name__)


@dataclass
class ClanProgressState:
    experience: int = 0
    level: int = 1


class ProgressionEngine:
    """Level-Tabelle + Operationen über einem vom Aufrufer gehaltenen ClanProgressState."""

    def __init__(self, levels=None, source=None):
        if levels is None:
            self._levels = dict(DEFAULT_LEVELS)
            self.source = 'defaults'
        else:
            self._levels = build_level_table(levels, source)
            self.source = source or 'in-memory'
        self._max_level = level_utils.max_level(self._levels)
        logger.info("Progression engine ready: %d levels (max %d) from %s",
                    len(self._levels), self._max_level, self.source)

    @classmethod
    def from_config(cls, document, source=None):
        """
        Erwartet ein Dokument der Form {"progression": {"levels": {...}}}.
        Fehlender Abschnitt -> Defaults, fehlerhafter Abschnitt -> ConfigurationError.
        """
        levels = levels_from_config(document, source)
        if levels is None:
            logger.info("No progression.levels section in %s; using default levels", source or 'config')
            return cls()
        return cls(levels, source or 'config')

    @classmethod
    def from_file(cls, path):
        return cls.from_config(load_config_file(path), str(path))

    # --- Tabelle ---

    @property
    def max_level(self) -> int:
        return self._max_level

    @property
    def levels(self):
        return tuple(self._levels[k] for k in sorted(self._levels))

    def calculate_level(self, experience: int) -> int:
        return level_utils.xp_to_level(self._levels, experience)

    def get_required_experience_for_level(self, level: int) -> int:
        definition = self._levels.get(level)
        return definition.experience_required if definition is not None else 0

    def get_level_benefits(self, level: int) -> dict:
        definition = self._levels.get(level)
        return dict(definition.benefits) if definition is not None else {}

    def get_level_information(self) -> list:
        """Alle Level als Daten (ohne Formatierung), aufsteigend sortiert."""
        return [
            {'level': d.level, 'exp_required': d.experience_required, 'benefits': dict(d.benefits)}
            for d in self.levels
        ]

    # --- Clan-Zustand ---

    def add_experience(self, state: ClanProgressState, amount: int) -> bool:
        """
        Addiert amount (auch negativ) zu state.experience, nicht unter 0.
        Gibt True zurück, wenn dadurch ein höheres Level erreicht wurde.
        Level sinken auf diesem Weg nie.
        """
        state.experience = max(0, state.experience + amount)
        new_level = self.calculate_level(state.experience)
        if new_level > state.level:
            logger.info("Clan leveled up: %d -> %d (experience %d)", state.level, new_level, state.experience)
            state.level = new_level
            return True
        return False

    def get_experience_for_next_level(self, state: ClanProgressState) -> int:
        """Fehlende Erfahrung bis zum nächsten Level, -1 auf dem Max-Level. Kann <= 0 sein."""
        if state.level >= self._max_level:
            return -1
        nxt = level_utils.next_defined_level(self._levels, state.level)
        if nxt is None:
            return -1
        return self._levels[nxt].experience_required - state.experience

    def get_level_progress(self, state: ClanProgressState) -> float:
        if state.level >= self._max_level:
            return 1.0
        return level_utils.level_progress(self._levels, state.level, state.experience)

    def get_clan_benefit(self, state: ClanProgressState, benefit_name: str) -> int:
        definition = self._levels.get(state.level)
        return definition.get_benefit(benefit_name) if definition is not None else 0

    def get_all_clan_benefits(self, state: ClanProgressState) -> dict:
        return self.get_level_benefits(state.level)

    def ensure_level_consistent(self, state: ClanProgressState) -> ClanProgressState:
        return level_utils.ensure_level_consistent(self._levels, state)


def load_engine(path=None):
    """
    Engine aus config.LEVELS_PATH (oder path) bauen.
    Kein Pfad -> Default-Tabelle; gesetzter Pfad ohne Datei -> ConfigurationError.
    """
    path = path or config.LEVELS_PATH
    if not path:
        return ProgressionEngine()
    try:
        return ProgressionEngine.from_file(path)
    except ConfigurationError:
        logger.exception("Fehler beim Laden der Level-Tabelle aus %s", path)
        raise
