"""cognito-login: interactive Cognito user pool login from .env project configs."""

from cognito_login.accounts import parse_account_list
from cognito_login.auth import authenticate, build_auth_config
from cognito_login.catalog import assemble_project, load_catalog, scan_project_names
from cognito_login.models import (
    AuthConfig,
    DefaultAccount,
    ProjectCatalog,
    ProjectConfig,
    TokenBundle,
)
from cognito_login.session import LoginSession, SessionState

__all__ = [
    "AuthConfig",
    "DefaultAccount",
    "LoginSession",
    "ProjectCatalog",
    "ProjectConfig",
    "SessionState",
    "TokenBundle",
    "assemble_project",
    "authenticate",
    "build_auth_config",
    "load_catalog",
    "parse_account_list",
    "scan_project_names",
]
