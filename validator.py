from collections.abc import Mapping

from jsonschema import Draft7Validator
from jsonschema.validators import extend

# Schema für einen einzelnen Eintrag unter progression.levels.<n>
LEVEL_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["exp_required"],
    "properties": {
        "exp_required": {"type": "integer", "minimum": 0},
        "benefits": {
            "type": ["object", "null"],
            "additionalProperties": {"type": "integer"},
        },
    },
}

# "object" = jedes Mapping, nicht nur dict (z.B. MappingProxyType)
_MappingValidator = extend(
    Draft7Validator,
    type_checker=Draft7Validator.TYPE_CHECKER.redefine("object", lambda checker, instance: isinstance(instance, Mapping)),
)
_LEVEL_VALIDATOR = _MappingValidator(LEVEL_SCHEMA)


def parse_level_key(key):
    """
    Wandelt einen Level-Schlüssel (int oder Ziffern-String wie "3") in int um.
    Raises ValueError für nicht-numerische Schlüssel.
    """
    if isinstance(key, bool):
        raise ValueError(f"level key {key!r} is not a number")
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        s = key.strip()
        if s.lstrip('-').isdigit():
            return int(s)
    raise ValueError(f"level key {key!r} is not a number")


def validate_levels(levels):
    """
    Returns (valid: bool, errors: list[str])
    Performs JSON Schema validation per level entry + project specific checks:
      - level keys numeric and >= 1
      - benefit names are strings
      - exp_required never decreases as the level rises
    """
    errors = []

    if not isinstance(levels, Mapping):
        return False, [f"levels: expected a mapping, got {type(levels).__name__}"]

    thresholds = {}
    for key, entry in levels.items():
        try:
            level = parse_level_key(key)
        except ValueError as e:
            errors.append(f"levels: {e}")
            continue
        if level < 1:
            errors.append(f"levels.{key}: level must be >= 1")
            continue
        if level in thresholds:
            errors.append(f"levels.{key}: duplicate level {level}")
            continue

        # Basic JSON Schema validation
        schema_errors = sorted(_LEVEL_VALIDATOR.iter_errors(entry), key=lambda e: ".".join(map(str, e.path)))
        for e in schema_errors:
            path = '.'.join(map(str, e.path))
            errors.append(f"levels.{key}{'.' + path if path else ''}: {e.message}")
        if schema_errors:
            continue

        benefits = entry.get('benefits') or {}
        for name in benefits:
            if not isinstance(name, str):
                errors.append(f"levels.{key}.benefits: benefit name {name!r} is not a string")

        thresholds[level] = int(entry['exp_required'])

    # Schwellen müssen mit dem Level monoton steigen
    previous = None
    for level in sorted(thresholds):
        required = thresholds[level]
        if previous is not None and required < previous[1]:
            errors.append(
                f"levels.{level}: exp_required {required} is lower than level {previous[0]} ({previous[1]})"
            )
        previous = (level, required)

    valid = len(errors) == 0
    return valid, errors
