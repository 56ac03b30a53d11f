"""Selectable environments and the environment snapshots built from them.

Each environment is backed by one dotenv file. Loading an environment never
touches ``os.environ``: it returns a read-only snapshot of the file's values
overlaid by the process environment (process values win, like a
non-overriding dotenv load).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from dotenv import dotenv_values

from cognito_login.exceptions import MissingEnvFileError

logger = logging.getLogger(__name__)

EnvSnapshot = Mapping[str, str]

BASE_ENVIRONMENT = "development"

ENV_FILES = {
    "development": ".env",
    "staging": ".env.staging",
    "production": ".env.production",
}


@dataclass(frozen=True)
class EnvironmentSource:
    """A named environment and the dotenv file that defines it."""

    name: str
    path: Path

    def exists(self) -> bool:
        return self.path.is_file()


def get_environment_source(name: str, env_dir: Path) -> EnvironmentSource:
    """Resolve an environment name to its dotenv file.

    Unknown names fall back to the base (.env) file with a warning.
    """
    filename = ENV_FILES.get(name)
    if filename is None:
        logger.warning(f"Invalid environment '{name}' specified. Using default .env")
        filename = ENV_FILES[BASE_ENVIRONMENT]
    return EnvironmentSource(name=name, path=env_dir / filename)


def require_base_env_file(env_dir: Path) -> EnvironmentSource:
    """Return the base environment, raising if its .env file is missing."""
    source = get_environment_source(BASE_ENVIRONMENT, env_dir)
    if not source.exists():
        raise MissingEnvFileError(str(source.path))
    return source


def available_environments(env_dir: Path) -> list[EnvironmentSource]:
    """List selectable environments.

    The base environment is always offered; staging and production only when
    their files exist.
    """
    sources = [get_environment_source(BASE_ENVIRONMENT, env_dir)]
    for name in ENV_FILES:
        if name == BASE_ENVIRONMENT:
            continue
        source = get_environment_source(name, env_dir)
        if source.exists():
            sources.append(source)
    return sources


def load_snapshot(
    source: EnvironmentSource,
    base: Mapping[str, str] | None = None,
) -> EnvSnapshot:
    """Build a read-only snapshot for an environment.

    Args:
        source: Environment whose dotenv file is read.
        base: Variables that take precedence over the file. Defaults to a copy
            of the process environment.

    Returns:
        Immutable mapping of variable names to values. Keys declared in the
        file without a value are left out.
    """
    values: dict[str, str] = {}
    if source.exists():
        values = {
            key: value
            for key, value in dotenv_values(source.path).items()
            if value is not None
        }
        logger.debug(f"Loaded {len(values)} variable(s) from {source.path}")
    else:
        logger.warning(f"Failed to load {source.path} file: file not found")

    values.update(os.environ if base is None else base)
    return MappingProxyType(values)
