"""
Level / XP Hilfsfunktionen über einer Level-Tabelle ({level: LevelDefinition}).
"""


def max_level(table) -> int:
    return max(table) if table else 0


def xp_to_level(table, xp: int) -> int:
    """
    Höchstes Level, dessen Schwelle <= xp ist; Lücken werden übersprungen.

    Beispiele (Default-Tabelle):
      999   -> 1
      1000  -> 2
      15000 -> 5

    Gibt 1 zurück, wenn kein Eintrag passt (z.B. leere Tabelle).
    """
    for level in sorted(table, reverse=True):
        if xp >= table[level].experience_required:
            return level
    return 1


def next_defined_level(table, level: int):
    """Nächstes definiertes Level oberhalb von level, oder None."""
    return min((k for k in table if k > level), default=None)


def level_progress(table, level: int, xp: int) -> float:
    """
    Anteil (0.0 - 1.0) des Weges von der Schwelle des aktuellen Levels
    zur Schwelle des nächsten Levels. 1.0 auf dem Max-Level.
    """
    nxt = next_defined_level(table, level)
    if nxt is None:
        return 1.0
    current = table[level].experience_required if level in table else 0
    span = table[nxt].experience_required - current
    if span <= 0:
        return 1.0
    return min(1.0, max(0.0, (xp - current) / span))


def ensure_level_consistent(table, state):
    """
    Setzt oder korrigiert state.level anhand von state.experience.
    Kann (anders als add_experience) auch herabstufen.
    Gibt den geänderten state zurück (in-memory).
    """
    state.level = xp_to_level(table, state.experience)
    return state
