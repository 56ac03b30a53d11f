"""Interactive login session.

The session is a finite state machine driven by a single dispatch loop:

    SELECT_ENVIRONMENT -> LOAD_CATALOG -> SELECT_PROJECT -> SELECT_CREDENTIALS
    -> AUTHENTICATE -> REPORT_RESULT -> CONTINUE_OR_QUIT

CONTINUE_OR_QUIT goes back to SELECT_ENVIRONMENT, or to DONE when the user
answers "no". Fatal errors (see cognito_login.exceptions.FatalError) propagate
out of run(); authentication failures are reported and the session goes on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

import typer

from cognito_login.auth import authenticate, build_auth_config
from cognito_login.catalog import load_catalog
from cognito_login.environments import (
    EnvironmentSource,
    available_environments,
    load_snapshot,
)
from cognito_login.exceptions import (
    AuthenticationError,
    EmptyCatalogError,
    NoAuthenticationResultError,
)
from cognito_login.models import AuthConfig, ProjectCatalog, ProjectConfig, TokenBundle
from cognito_login.prompts import (
    OutOfRange,
    ask,
    ask_credentials,
    choose,
    show_menu,
)

logger = logging.getLogger(__name__)

Authenticator = Callable[[AuthConfig, str, str], TokenBundle]

MANUAL_ENTRY_OPTION = "Enter credentials manually"
CONTINUE_PROMPT = "Do you want to continue? Type 'yes' to start over or 'no' to quit"
QUIT_ANSWER = "no"


class SessionState(Enum):
    SELECT_ENVIRONMENT = auto()
    LOAD_CATALOG = auto()
    SELECT_PROJECT = auto()
    SELECT_CREDENTIALS = auto()
    AUTHENTICATE = auto()
    REPORT_RESULT = auto()
    CONTINUE_OR_QUIT = auto()
    DONE = auto()


@dataclass
class LoginSession:
    """State and transitions of one interactive login session.

    Attributes:
        env_dir: Directory holding the environment files.
        authenticator: Callable exchanging credentials for tokens.
        base_env: Variables overlaid on every environment file. Defaults to
            the process environment.
    """

    env_dir: Path
    authenticator: Authenticator = authenticate
    base_env: Mapping[str, str] | None = None

    # Per-iteration context, reset on every SELECT_ENVIRONMENT
    environment: EnvironmentSource | None = None
    catalog: ProjectCatalog = field(default_factory=dict)
    project: ProjectConfig | None = None
    auth_config: AuthConfig | None = None
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    tokens: TokenBundle | None = None
    error: AuthenticationError | None = None

    def run(self) -> None:
        """Run the session until the user quits."""
        state = SessionState.SELECT_ENVIRONMENT
        while state is not SessionState.DONE:
            state = self.step(state)

    def step(self, state: SessionState) -> SessionState:
        """Execute one state and return the next one."""
        handlers: dict[SessionState, Callable[[], SessionState]] = {
            SessionState.SELECT_ENVIRONMENT: self._select_environment,
            SessionState.LOAD_CATALOG: self._load_catalog,
            SessionState.SELECT_PROJECT: self._select_project,
            SessionState.SELECT_CREDENTIALS: self._select_credentials,
            SessionState.AUTHENTICATE: self._authenticate,
            SessionState.REPORT_RESULT: self._report_result,
            SessionState.CONTINUE_OR_QUIT: self._continue_or_quit,
        }
        logger.debug(f"Session state: {state.name}")
        return handlers[state]()

    def _reset(self) -> None:
        self.environment = None
        self.catalog = {}
        self.project = None
        self.auth_config = None
        self.username = None
        self.password = None
        self.tokens = None
        self.error = None

    def _select_environment(self) -> SessionState:
        self._reset()
        sources = available_environments(self.env_dir)
        show_menu("Select an environment:", [source.name for source in sources])
        self.environment = sources[choose(len(sources), OutOfRange.REPROMPT)]
        return SessionState.LOAD_CATALOG

    def _load_catalog(self) -> SessionState:
        assert self.environment is not None
        snapshot = load_snapshot(self.environment, self.base_env)
        self.catalog = load_catalog(snapshot)
        if not self.catalog:
            raise EmptyCatalogError(self.environment.name)
        return SessionState.SELECT_PROJECT

    def _select_project(self) -> SessionState:
        projects = list(self.catalog.values())
        show_menu("Select a project to login:", [p.name for p in projects])
        index = choose(
            len(projects),
            OutOfRange.ABORT,
            error_message="Invalid project selection",
        )
        self.project = projects[index]
        typer.echo(f"Selected project: {self.project.name}")
        self.auth_config = build_auth_config(self.project)
        return SessionState.SELECT_CREDENTIALS

    def _select_credentials(self) -> SessionState:
        assert self.project is not None
        accounts = self.project.default_accounts
        if not accounts:
            typer.echo("No default accounts found for this project.")
            self.username, self.password = ask_credentials()
            return SessionState.AUTHENTICATE

        show_menu(
            "Default accounts available:",
            [account.username for account in accounts] + [MANUAL_ENTRY_OPTION],
        )
        index = choose(len(accounts) + 1, OutOfRange.REPROMPT)
        if index < len(accounts):
            self.username = accounts[index].username
            self.password = accounts[index].password
        else:
            self.username, self.password = ask_credentials()
        return SessionState.AUTHENTICATE

    def _authenticate(self) -> SessionState:
        assert self.auth_config is not None
        assert self.username is not None and self.password is not None
        try:
            self.tokens = self.authenticator(
                self.auth_config, self.username, self.password
            )
        except AuthenticationError as e:
            logger.info(f"Authentication failed for {self.username}: {e}")
            self.error = e
        finally:
            self.password = None
        return SessionState.REPORT_RESULT

    def _report_result(self) -> SessionState:
        if isinstance(self.error, NoAuthenticationResultError):
            typer.echo("Authentication failed. No authentication result returned.")
            if self.error.detail:
                typer.echo(f"  {self.error.detail}")
        elif self.error is not None:
            typer.echo(f"Authentication error: {self.error}")
        elif self.tokens is not None:
            typer.echo("Authentication successful!")
            typer.echo("Payload:")
            typer.echo(f"  ID Token: {self.tokens.id_token}")
            typer.echo(f"  Access Token: {self.tokens.access_token}")
            typer.echo(f"  Refresh Token: {self.tokens.refresh_token}")
            typer.echo(f"  Expires In: {self.tokens.expires_in} seconds")
        return SessionState.CONTINUE_OR_QUIT

    def _continue_or_quit(self) -> SessionState:
        answer = ask(CONTINUE_PROMPT)
        if answer.casefold() == QUIT_ANSWER:
            return SessionState.DONE
        return SessionState.SELECT_ENVIRONMENT
