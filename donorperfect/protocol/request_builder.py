# ============================================================================
# SCOPE: PROTOCOL LAYER (DonorPerfect)
# Description: Query-string request builder for the DonorPerfect XML API.
# ============================================================================
"""Request Builder.

Builds GET request URLs for the DonorPerfect endpoint.
Single responsibility: authentication prefix, percent-encoding and the
URL length limit.

Usage:
    builder = RequestBuilder(DEFAULT_BASE_URL)
    request = builder.build(ApiKeyAuth("KEY"), "dp_gifts", "@donor_id=7")
    request.url  # https://...xmlrequest.asp?apikey=KEY&action=dp_gifts&params=%40donor_id%3D7
"""

from dataclasses import dataclass, field
from urllib.parse import quote

from .exceptions import RequestTooLargeError

DEFAULT_BASE_URL = "https://www.donorperfect.net/prod/xmlrequest.asp"

MAX_URL_LENGTH = 8000

_SQL_WHITESPACE = frozenset(" \t\r\n")
_SQL_QUOTES = frozenset("'\"")


@dataclass(frozen=True)
class ApiKeyAuth:
    """API key credentials. The key is sent raw, never percent-encoded."""

    api_key: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise ValueError("Invalid credentials: the API key must not be empty")


@dataclass(frozen=True)
class UserPassAuth:
    """Login/password credentials sent as regular query fields."""

    login: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        if not self.login or not self.password:
            raise ValueError("Invalid credentials: login and password must not be empty")


Auth = ApiKeyAuth | UserPassAuth


@dataclass(frozen=True)
class EncodedRequest:
    """Fully assembled request.

    Attributes:
        url: Absolute URL including the query string.
        query_string: Query string without the leading '?'.
    """

    url: str
    query_string: str


def normalize_sql_whitespace(sql: str) -> str:
    """Collapse formatting whitespace outside quoted literals.

    Runs of space, tab, CR and LF outside quotes become a single space.
    Quote state toggles on every ``'`` or ``"`` regardless of which one
    opened the literal. Leading and trailing formatting whitespace is
    dropped.
    """
    in_quote = False
    output: list[str] = []
    for char in sql:
        if char in _SQL_QUOTES:
            in_quote = not in_quote
        if char in _SQL_WHITESPACE and not in_quote:
            if not output or output[-1] == " ":
                continue
            output.append(" ")
        else:
            output.append(char)
    if output and output[-1] == " " and not in_quote:
        output.pop()
    return "".join(output)


class RequestBuilder:
    """Builds DonorPerfect request URLs.

    Attributes:
        base_url: Endpoint URL without query string.
        max_length: Maximum length of the assembled URL.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, max_length: int = MAX_URL_LENGTH) -> None:
        self.base_url = base_url
        self.max_length = max_length

    def build(self, auth: Auth, action: str, params: str | None = None) -> EncodedRequest:
        """Build a request for a procedure or SQL action.

        Args:
            auth: API key or login/password credentials.
            action: Procedure name or raw SQL.
            params: Encoded parameter list, if any.

        Returns:
            EncodedRequest with the final URL.

        Raises:
            RequestTooLargeError: If the URL exceeds max_length.
        """
        prefix = ""
        fields: list[tuple[str, str]] = []

        if isinstance(auth, ApiKeyAuth):
            prefix = f"apikey={auth.api_key}&"
        else:
            fields.append(("login", auth.login))
            fields.append(("pass", auth.password))

        fields.append(("action", action))
        if params is not None:
            fields.append(("params", params))

        encoded = "&".join(f"{quote(name, safe='')}={quote(value, safe='')}" for name, value in fields)
        query_string = (prefix + encoded).replace("+", "%2B")

        url = f"{self.base_url}?{query_string}"
        if len(url) > self.max_length:
            raise RequestTooLargeError(len(url), self.max_length)

        return EncodedRequest(url=url, query_string=query_string)

    def build_sql(self, auth: Auth, sql: str) -> EncodedRequest:
        """Build a raw SQL request after whitespace normalization."""
        return self.build(auth, normalize_sql_whitespace(sql))
