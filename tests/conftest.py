import os
import typing
from pathlib import Path
from unittest import mock

import boto3
import pytest
from botocore.stub import Stubber

from cognito_login.config import clear_settings_cache
from cognito_login.testing import temp_env_vars

ALPHA_ACCOUNTS = (
    '[{"username":"alice","password":"pw-alice"},'
    '{"username":"bob","password":"pw-bob"}]'
)

DEFAULT_ENV = f"""\
ALPHA_REGION=us-east-1
ALPHA_POOL_ID=us-east-1_alpha
ALPHA_CLIENT_ID=client-alpha
ALPHA_DEFAULT_ACCOUNTS='{ALPHA_ACCOUNTS}'

BETA_REGION=eu-west-1
BETA_POOL_ID=eu-west-1_beta
BETA_CLIENT_ID=client-beta
"""

# InitiateAuth rejects challenge sessions shorter than 20 characters.
CHALLENGE_SESSION = "challenge-session-0123456789abcdef"


@pytest.fixture(scope="function", autouse=True)
def cleared_cognito_login_env_vars() -> typing.Generator[None, None, None]:
    """Clear COGNITO_LOGIN_* environment variables for the duration of the test."""
    env_vars = [var for var in os.environ if var.startswith("COGNITO_LOGIN_")]
    with temp_env_vars({var: None for var in env_vars}):
        clear_settings_cache()
        yield
    clear_settings_cache()


@pytest.fixture
def env_dir(tmp_path: Path) -> Path:
    """An environment directory with a .env defining ALPHA and BETA."""
    (tmp_path / ".env").write_text(DEFAULT_ENV)
    return tmp_path


@pytest.fixture
def cognito_stub() -> typing.Generator[Stubber, None, None]:
    """Stubbed cognito-idp client returned by cognito_login.auth.create_client."""
    client = boto3.client("cognito-idp", region_name="us-east-1")
    with Stubber(client) as stubber:
        with mock.patch("cognito_login.auth.create_client", return_value=client):
            yield stubber


def add_auth_success(stubber: Stubber, expected_params: dict | None = None) -> None:
    stubber.add_response(
        "initiate_auth",
        {
            "AuthenticationResult": {
                "IdToken": "id-token",
                "AccessToken": "access-token",
                "RefreshToken": "refresh-token",
                "ExpiresIn": 3600,
                "TokenType": "Bearer",
            },
            "ChallengeParameters": {},
        },
        expected_params,
    )


def add_auth_failure(stubber: Stubber) -> None:
    stubber.add_client_error(
        "initiate_auth",
        service_error_code="NotAuthorizedException",
        service_message="Incorrect username or password.",
        http_status_code=400,
    )
