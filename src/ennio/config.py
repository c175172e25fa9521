"""
Configuration management with YAML loading and JSON schema validation.

A config file declares one workflow:

    name: deploy
    logging:
      level: INFO
    actions:
      - name: build
        type: bash
        script: make all

Loading fails with a LoadingError subclass (reading, parsing or
validating) before any workflow is built.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from jsonschema import Draft202012Validator

from .actions import Action, BashAction
from .constants import CONFIG_ENV_VAR, CONFIG_FILE_NAMES, CONFIG_SCHEMA
from .workflow import Workflow

logger = logging.getLogger(__name__)


class LoadingError(Exception):
    """Base class for configuration loading failures."""


class ReadingError(LoadingError):
    """The config file could not be read."""


class ParsingError(LoadingError):
    """The config file is not valid YAML."""


class ValidatingError(LoadingError):
    """The config file does not satisfy the schema."""

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class ActionConfig:
    name: str
    type: str
    script: str = ""


@dataclass
class Config:
    name: str
    actions: list[ActionConfig] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    path: Path | None = None

    @classmethod
    def load(cls, path: Path) -> Config:
        """
        Load and validate a config file.

        Raises:
            ReadingError: File missing or unreadable
            ParsingError: Invalid YAML
            ValidatingError: Schema violations or duplicate action names
        """
        path = Path(path)
        logger.info(f"Loading configuration from {path}")
        try:
            try:
                text = path.read_text()
            except (OSError, UnicodeDecodeError) as e:
                raise ReadingError(str(e)) from e

            try:
                data = yaml.safe_load(text)
            except yaml.YAMLError as e:
                raise ParsingError(str(e)) from e

            validate(data)
        except LoadingError as e:
            logger.error(f"Unable to load configuration: {e}")
            raise

        config = cls._from_dict(data)
        config.path = path
        return config

    @classmethod
    def _from_dict(cls, data: dict) -> Config:
        """Create config from an already validated dictionary."""
        config = cls(name=data["name"])

        for item in data["actions"]:
            config.actions.append(ActionConfig(**item))

        if "logging" in data:
            for key, value in data["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        return config

    def _to_dict(self) -> dict:
        """Convert config back to its file representation."""
        return {
            "name": self.name,
            "logging": {"level": self.logging.level},
            "actions": [{"name": a.name, "type": a.type, "script": a.script} for a in self.actions],
        }

    def build_workflow(self) -> Workflow:
        """Build the Workflow described by this config."""
        return Workflow(self.name, [build_action(action) for action in self.actions])


def _error_location(error) -> str:
    if not error.absolute_path:
        return "<root>"
    return "/".join(str(part) for part in error.absolute_path)


def validate(data: object) -> None:
    """
    Validate parsed config data.

    Raises:
        ValidatingError: With one message per problem found
    """
    validator = Draft202012Validator(CONFIG_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    messages = [f"{_error_location(e)}: {e.message}" for e in errors]

    if not errors:
        seen: set[str] = set()
        for index, action in enumerate(data["actions"]):
            if action["name"] in seen:
                messages.append(f"actions/{index}/name: duplicate action name {action['name']!r}")
            seen.add(action["name"])

    if messages:
        raise ValidatingError(messages)


def _build_bash_action(config: ActionConfig) -> Action:
    return BashAction(config.name, config.script)


ACTION_BUILDERS: dict[str, Callable[[ActionConfig], Action]] = {
    "bash": _build_bash_action,
}


def build_action(config: ActionConfig) -> Action:
    """Build the action declared by an ActionConfig."""
    try:
        builder = ACTION_BUILDERS[config.type]
    except KeyError:
        raise ValueError(f"Unknown action type for {config.name}: {config.type}") from None
    return builder(config)


def find_config(config_path: Path | None = None, search_dir: Path | None = None) -> Path:
    """
    Find the config file to use.

    Search order:
    1. Explicit path
    2. $ENNIO_CONFIG
    3. ennio.yml / ennio.yaml in search_dir (default: current directory)

    Raises:
        ReadingError: If no candidate exists
    """
    if config_path is not None:
        return Path(config_path)

    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path)

    search_dir = search_dir or Path.cwd()
    for name in CONFIG_FILE_NAMES:
        path = search_dir / name
        if path.exists():
            return path

    raise ReadingError(f"No config file found (tried {', '.join(CONFIG_FILE_NAMES)} in {search_dir})")


def load_config(config_path: Path | None = None, search_dir: Path | None = None) -> Config:
    """Find and load a config file, see find_config for the search order."""
    return Config.load(find_config(config_path, search_dir))
