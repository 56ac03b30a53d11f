"""Username/password authentication against a Cognito user pool."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from cognito_login.exceptions import AuthenticationError, NoAuthenticationResultError
from cognito_login.models import AuthConfig, ProjectConfig, TokenBundle
from cognito_login.regions import parse_region

if TYPE_CHECKING:
    from mypy_boto3_cognito_idp.client import CognitoIdentityProviderClient
else:
    CognitoIdentityProviderClient = object

logger = logging.getLogger(__name__)

AUTH_FLOW = "USER_PASSWORD_AUTH"


def build_auth_config(project: ProjectConfig) -> AuthConfig:
    """Derive the AuthConfig for a project, validating its region.

    Raises:
        InvalidRegionError: If the project's region is not recognized.
    """
    return AuthConfig(
        pool_id=project.pool_id,
        client_id=project.client_id,
        region=parse_region(project.region, project.name),
    )


def create_client(region: str) -> CognitoIdentityProviderClient:
    return boto3.client("cognito-idp", region_name=region)


def authenticate(
    auth_config: AuthConfig,
    username: str,
    password: str,
    client: CognitoIdentityProviderClient | None = None,
) -> TokenBundle:
    """Exchange a username and password for tokens.

    Args:
        auth_config: Pool, client and region of the project.
        username: Account username.
        password: Account password.
        client: Optional cognito-idp client. Created for the configured region
            if not given.

    Returns:
        The tokens issued by the user pool.

    Raises:
        AuthenticationError: If the provider rejects the request or cannot be
            reached.
        NoAuthenticationResultError: If the provider answers with a challenge
            instead of tokens.
    """
    logger.debug(
        f"Initiating {AUTH_FLOW} for {username} "
        f"(pool {auth_config.pool_id}, region {auth_config.region})"
    )
    try:
        client = client or create_client(auth_config.region)
        response = client.initiate_auth(
            AuthFlow=AUTH_FLOW,
            ClientId=auth_config.client_id,
            AuthParameters={"USERNAME": username, "PASSWORD": password},
        )
    except ClientError as e:
        error = e.response.get("Error", {})
        raise AuthenticationError(
            code=error.get("Code"),
            detail=error.get("Message") or str(e),
        ) from e
    except BotoCoreError as e:
        raise AuthenticationError(detail=str(e)) from e

    return _token_bundle(response)


def _token_bundle(response: dict[str, Any]) -> TokenBundle:
    result = response.get("AuthenticationResult")
    if not result:
        raise NoAuthenticationResultError(response.get("ChallengeName"))
    return TokenBundle(
        id_token=result.get("IdToken") or "",
        access_token=result.get("AccessToken") or "",
        refresh_token=result.get("RefreshToken") or "",
        expires_in=result.get("ExpiresIn") or 0,
        token_type=result.get("TokenType") or "",
    )
