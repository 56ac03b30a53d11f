"""cognito-login exceptions.

Fatal errors end the whole program: the CLI prints them and exits with a
non-zero status. Everything else is handled inside the session and reported
without ending it.
"""


class CognitoLoginError(Exception):
    """Base exception for all cognito-login errors."""

    pass


class FatalError(CognitoLoginError):
    """Error that terminates the program."""

    pass


class MissingEnvFileError(FatalError):
    """The base environment file (.env) does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"{path} file is missing. "
            "Please create a .env file with the required configuration."
        )


class EmptyCatalogError(FatalError):
    """No fully configured project was found in the environment."""

    def __init__(self, environment: str | None = None):
        self.environment = environment
        msg = "No projects found in the environment configuration."
        if environment:
            msg = f"No projects found in the '{environment}' environment configuration."
        super().__init__(msg)


class InvalidSelectionError(FatalError):
    """A numeric prompt received input that ends the session.

    Raised for non-numeric input at any numeric prompt and for an
    out-of-range project index.
    """

    def __init__(self, message: str = "Invalid input", value: str | None = None):
        self.value = value
        if value is not None:
            message = f"{message}: {value!r}"
        super().__init__(message)


class InvalidRegionError(FatalError):
    """A project's region is not a recognized region identifier."""

    def __init__(self, region: str, project: str | None = None):
        self.region = region
        self.project = project
        msg = f"Unknown region '{region}'"
        if project:
            msg = f"Unknown region '{region}' for project '{project}'"
        super().__init__(msg)


class AccountListParseError(CognitoLoginError):
    """A default-accounts value could not be parsed by any strategy.

    Attributes:
        errors: Mapping of strategy name to the reason it failed.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        details = "; ".join(f"{name}: {error}" for name, error in errors.items())
        super().__init__(f"Could not parse default accounts ({details})")


class AuthenticationError(CognitoLoginError):
    """The identity provider rejected or failed the authentication request.

    Attributes:
        code: Provider error code (if available)
        detail: Error detail message from the provider
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str | None = None,
        detail: str | None = None,
    ):
        self.code = code
        self.detail = detail
        parts = [message]
        if code:
            parts.append(f"({code})")
        if detail:
            parts.append(f": {detail}")
        super().__init__(" ".join(parts))


class NoAuthenticationResultError(AuthenticationError):
    """The provider answered without tokens (e.g. it issued a challenge).

    Challenge flows such as MFA or a forced password change are not supported.
    """

    def __init__(self, challenge_name: str | None = None):
        self.challenge_name = challenge_name
        detail = f"challenge {challenge_name} is not supported" if challenge_name else None
        super().__init__(
            "No authentication result returned",
            detail=detail,
        )
