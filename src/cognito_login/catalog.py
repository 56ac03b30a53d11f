"""Project discovery from an environment snapshot.

A project named ``NAME`` is described by these variables:

    NAME_REGION             marks NAME as a candidate project
    NAME_POOL_ID            required
    NAME_CLIENT_ID          required
    NAME_DEFAULT_ACCOUNTS   optional, see cognito_login.accounts

Candidates missing a pool id or client id are dropped without error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from cognito_login.accounts import parse_account_list
from cognito_login.exceptions import AccountListParseError
from cognito_login.models import ProjectCatalog, ProjectConfig

logger = logging.getLogger(__name__)

REGION_SUFFIX = "_REGION"
POOL_ID_SUFFIX = "_POOL_ID"
CLIENT_ID_SUFFIX = "_CLIENT_ID"
DEFAULT_ACCOUNTS_SUFFIX = "_DEFAULT_ACCOUNTS"


def scan_project_names(env: Mapping[str, str]) -> set[str]:
    """Return the names of all candidate projects in ``env``."""
    names = set()
    for key in env:
        if key.endswith(REGION_SUFFIX):
            name = key[: -len(REGION_SUFFIX)]
            if name:
                names.add(name)
    return names


def assemble_project(name: str, env: Mapping[str, str]) -> ProjectConfig | None:
    """Build the ProjectConfig for a candidate, or None if it is incomplete.

    An unparseable default-accounts value does not drop the project; it only
    leaves it without default accounts.
    """
    region = env.get(f"{name}{REGION_SUFFIX}")
    pool_id = env.get(f"{name}{POOL_ID_SUFFIX}")
    client_id = env.get(f"{name}{CLIENT_ID_SUFFIX}")
    if region is None:
        return None
    if pool_id is None or client_id is None:
        logger.debug(f"Skipping project {name}: pool id or client id not set")
        return None

    logger.info(f"Processing project: {name}")

    default_accounts = None
    raw_accounts = env.get(f"{name}{DEFAULT_ACCOUNTS_SUFFIX}")
    if raw_accounts:
        try:
            accounts = parse_account_list(raw_accounts).unwrap()
        except AccountListParseError as e:
            logger.warning(f"Ignoring {name}{DEFAULT_ACCOUNTS_SUFFIX}: {e}")
        else:
            logger.info(f"Parsed {len(accounts)} default account(s) for {name}")
            default_accounts = accounts or None

    return ProjectConfig(
        name=name,
        region=region,
        pool_id=pool_id,
        client_id=client_id,
        default_accounts=default_accounts,
    )


def load_catalog(env: Mapping[str, str]) -> ProjectCatalog:
    """Build the project catalog, ordered by project name."""
    catalog: ProjectCatalog = {}
    for name in sorted(scan_project_names(env)):
        project = assemble_project(name, env)
        if project is not None:
            catalog[name] = project
    return catalog
