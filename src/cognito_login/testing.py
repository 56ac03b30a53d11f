"""Helpers for tests that need project environments."""

import os
from collections.abc import Mapping
from contextlib import contextmanager

from cognito_login.catalog import (
    CLIENT_ID_SUFFIX,
    DEFAULT_ACCOUNTS_SUFFIX,
    POOL_ID_SUFFIX,
    REGION_SUFFIX,
)

__all__ = [
    "project_env_vars",
    "temp_env_vars",
]


def project_env_vars(
    name: str,
    region: str = "us-east-1",
    pool_id: str | None = None,
    client_id: str | None = None,
    default_accounts: str | None = None,
) -> dict[str, str]:
    """Environment variables describing one complete project.

    Pool and client ids default to values derived from the project name.
    """
    env = {
        f"{name}{REGION_SUFFIX}": region,
        f"{name}{POOL_ID_SUFFIX}": pool_id or f"{region}_{name.lower()}",
        f"{name}{CLIENT_ID_SUFFIX}": client_id or f"client-{name.lower()}",
    }
    if default_accounts is not None:
        env[f"{name}{DEFAULT_ACCOUNTS_SUFFIX}"] = default_accounts
    return env


@contextmanager
def temp_env_vars(name_value: Mapping[str, str | None]):
    """Temporarily set or unset process environment variables.

    Args:
        name_value: Mapping of env var name to value. Use None to temporarily
            unset a variable.
    """
    original = {name: os.getenv(name, None) for name in name_value}
    for name, value in name_value.items():
        if value is None:
            os.environ.pop(name, None)
        else:
            os.environ[name] = value
    try:
        yield
    finally:
        for name, value in original.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value
