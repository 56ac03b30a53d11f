"""Parsing of `<PROJECT>_DEFAULT_ACCOUNTS` values.

Two encodings are accepted and tried in a fixed order:

1. JSON: an array of objects with string ``username`` and ``password`` fields,
   e.g. ``[{"username": "a", "password": "b"}]``.
2. A permissive brace format, e.g. ``[{username:"a",password:"b"},{...}]``.
   Values cannot contain commas or colons and nothing is unescaped.

The first strategy that succeeds wins. If every strategy fails, the whole list
is rejected: there are no partial results.

Usage:
    from cognito_login.accounts import parse_account_list

    result = parse_account_list(raw)
    if result.ok:
        print(result.accounts)
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from pydantic import TypeAdapter, ValidationError

from cognito_login.exceptions import AccountListParseError
from cognito_login.models import DefaultAccount

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "password")


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing an account list.

    Attributes:
        accounts: Parsed accounts (empty on failure).
        strategy: Name of the strategy that produced the accounts, or None.
        errors: Mapping of strategy name to failure reason.
    """

    accounts: tuple[DefaultAccount, ...] = ()
    strategy: str | None = None
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors or self.strategy is not None

    def unwrap(self) -> tuple[DefaultAccount, ...]:
        """Return the accounts or raise AccountListParseError."""
        if not self.ok:
            raise AccountListParseError(self.errors)
        return self.accounts

    @classmethod
    def success(cls, accounts: Sequence[DefaultAccount], strategy: str) -> ParseResult:
        return cls(accounts=tuple(accounts), strategy=strategy)

    @classmethod
    def failure(cls, strategy: str, error: str) -> ParseResult:
        return cls(errors={strategy: error})


class AccountListParserABC(metaclass=abc.ABCMeta):
    """A single account-list decoding strategy."""

    name: str

    @abc.abstractmethod
    def parse(self, raw: str) -> ParseResult:
        """Decode ``raw`` into accounts, returning a failure result on error."""


class JsonAccountListParser(AccountListParserABC):
    name = "json"

    _adapter = TypeAdapter(list[DefaultAccount])

    def parse(self, raw: str) -> ParseResult:
        try:
            accounts = self._adapter.validate_json(raw)
        except ValidationError as e:
            return ParseResult.failure(self.name, _summarize(e))
        return ParseResult.success(accounts, self.name)


class BraceAccountListParser(AccountListParserABC):
    """Parser for ``[{key:value,key:value},{key:value,...}]``."""

    name = "custom"

    def parse(self, raw: str) -> ParseResult:
        body = _strip_once(raw, "[", "]")
        accounts = []
        for index, chunk in enumerate(body.split("},{")):
            fields = self._parse_chunk(chunk)
            missing = [key for key in REQUIRED_FIELDS if key not in fields]
            if missing:
                return ParseResult.failure(
                    self.name,
                    f"entry {index + 1} is missing {', '.join(missing)}",
                )
            try:
                accounts.append(
                    DefaultAccount(
                        username=fields["username"], password=fields["password"]
                    )
                )
            except ValidationError as e:
                return ParseResult.failure(
                    self.name, f"entry {index + 1}: {_summarize(e)}"
                )
        return ParseResult.success(accounts, self.name)

    @staticmethod
    def _parse_chunk(chunk: str) -> dict[str, str]:
        fields: dict[str, str] = {}
        for fragment in _strip_once(chunk, "{", "}").split(","):
            key, sep, value = fragment.partition(":")
            if not sep:
                continue
            fields[key] = _strip_once(value, '"', '"')
        return fields


DEFAULT_STRATEGIES: tuple[AccountListParserABC, ...] = (
    JsonAccountListParser(),
    BraceAccountListParser(),
)


def parse_account_list(
    raw: str,
    strategies: Sequence[AccountListParserABC] = DEFAULT_STRATEGIES,
) -> ParseResult:
    """Parse a raw default-accounts value.

    Strategies are tried in order and the first success is returned. An empty
    string yields an empty successful result without running any strategy.

    Args:
        raw: The raw environment value.
        strategies: Ordered parsing strategies.

    Returns:
        A successful ParseResult, or a failed one holding every strategy's
        error.
    """
    if raw == "":
        return ParseResult()

    errors: dict[str, str] = {}
    for strategy in strategies:
        result = strategy.parse(raw)
        if result.ok:
            logger.debug(
                f"Parsed {len(result.accounts)} default account(s) "
                f"using the {strategy.name} format"
            )
            return result
        logger.debug(f"Failed to parse default accounts as {strategy.name}")
        errors.update(result.errors)
    return ParseResult(errors=errors)


def _strip_once(value: str, prefix: str, suffix: str) -> str:
    if value.startswith(prefix):
        value = value[len(prefix) :]
    if value.endswith(suffix):
        value = value[: -len(suffix)]
    return value


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if location:
        return f"{location}: {first['msg']}"
    return first["msg"]
