"""
Centralized constants for Ennio.

Patterns, bounds and the configuration schema shared across modules.
"""

# Action names are restricted so the reference separator is never ambiguous
ACTION_NAME_PATTERN = r"[A-Za-z0-9_]+"

# Separator between action name and field name in a variable reference
REFERENCE_SEPARATOR = "."

# Integer variant bounds (u64 / i64)
POSITIVE_INT_MAX = 2**64 - 1
NEGATIVE_INT_MIN = -(2**63)
NEGATIVE_INT_MAX = 2**63 - 1

# Config file discovery
CONFIG_ENV_VAR = "ENNIO_CONFIG"
CONFIG_FILE_NAMES = ("ennio.yml", "ennio.yaml")

# Action kinds that can be declared in a config file
ACTION_TYPES = ("bash",)

CONFIG_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Ennio workflow",
    "type": "object",
    "additionalProperties": False,
    "required": ["name", "actions"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "logging": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "level": {"enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]},
            },
        },
        "actions": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["name", "type", "script"],
                "properties": {
                    "name": {"type": "string", "pattern": rf"\A{ACTION_NAME_PATTERN}\Z"},
                    "type": {"enum": list(ACTION_TYPES)},
                    "script": {"type": "string"},
                },
            },
        },
    },
}
