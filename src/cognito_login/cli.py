"""cognito-login CLI.

Usage:
    cognito-login login [--env-dir DIR]
    cognito-login projects [-e environment] [--env-dir DIR]
    cognito-login version

Configuration:
    Projects are read from .env (development), .env.staging and
    .env.production in the environment directory. Each project NAME needs
    NAME_REGION, NAME_POOL_ID and NAME_CLIENT_ID, and may set
    NAME_DEFAULT_ACCOUNTS.

    Set COGNITO_LOGIN_ENV_DIR to change the environment directory and
    COGNITO_LOGIN_LOG_LEVEL to change the log level.
"""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError

from cognito_login.catalog import load_catalog
from cognito_login.config import get_settings
from cognito_login.environments import (
    BASE_ENVIRONMENT,
    get_environment_source,
    load_snapshot,
    require_base_env_file,
)
from cognito_login.exceptions import EmptyCatalogError, FatalError
from cognito_login.session import LoginSession

app = typer.Typer(
    name="cognito-login",
    help="Exchange a username and password for Cognito user pool tokens",
    no_args_is_help=True,
)


def _resolve_env_dir(env_dir: Path | None) -> Path:
    return env_dir if env_dir is not None else get_settings().env_dir


def _fail(error: Exception) -> typer.Exit:
    typer.echo(f"Error: {error}", err=True)
    return typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """Interactive Cognito login for projects configured in .env files.

    Use 'cognito-login login' to start a session.
    Use 'cognito-login projects' to see the configured projects.
    """
    try:
        settings = get_settings()
    except ValidationError as e:
        raise _fail(e)
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def login(
    env_dir: Path = typer.Option(
        None,
        "--env-dir",
        "-d",
        help="Directory containing the .env files (default: COGNITO_LOGIN_ENV_DIR or .)",
    ),
) -> None:
    """Select an environment, a project and an account, then log in.

    The session restarts after every attempt until you answer 'no'.
    """
    effective_dir = _resolve_env_dir(env_dir)
    try:
        require_base_env_file(effective_dir)
        LoginSession(env_dir=effective_dir).run()
    except FatalError as e:
        raise _fail(e)


@app.command()
def projects(
    environment: str = typer.Option(
        BASE_ENVIRONMENT,
        "--environment",
        "-e",
        help="Environment to inspect (development, staging or production)",
    ),
    env_dir: Path = typer.Option(
        None,
        "--env-dir",
        "-d",
        help="Directory containing the .env files (default: COGNITO_LOGIN_ENV_DIR or .)",
    ),
) -> None:
    """List the fully configured projects of an environment."""
    effective_dir = _resolve_env_dir(env_dir)
    try:
        require_base_env_file(effective_dir)
        source = get_environment_source(environment, effective_dir)
        catalog = load_catalog(load_snapshot(source))
        if not catalog:
            raise EmptyCatalogError(source.name)
    except FatalError as e:
        raise _fail(e)

    typer.echo(f"Projects in {source.name} ({source.path}):")
    for project in catalog.values():
        accounts = len(project.default_accounts or ())
        typer.echo(f"  {project.name}")
        typer.echo(f"    Region: {project.region}")
        typer.echo(f"    Pool ID: {project.pool_id}")
        typer.echo(f"    Client ID: {project.client_id}")
        typer.echo(f"    Default accounts: {accounts}")


@app.command()
def version() -> None:
    """Show the cognito-login version."""
    try:
        from importlib.metadata import version as get_version

        ver = get_version("cognito-login")
    except Exception:
        ver = "unknown"

    typer.echo(f"cognito-login {ver}")


if __name__ == "__main__":
    app()
