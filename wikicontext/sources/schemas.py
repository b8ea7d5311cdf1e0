"""
Data models for configured documentation sources.

A SourceEntry is built once at startup from configuration and never
changes afterwards. Authentication is modelled as a tagged union of
credential types, discriminated by ``type``, so each variant carries
only the fields it needs.
"""

import base64
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

logger = logging.getLogger(__name__)


class SourceType(str, Enum):
    """Supported documentation source types."""

    MARKDOWN = "markdown"
    MEDIAWIKI = "mediawiki"
    GITBOOK = "gitbook"
    CONFLUENCE = "confluence"
    SHAREPOINT = "sharepoint"
    UNKNOWN = "unknown"


class _Credentials(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    def headers(self) -> dict[str, str]:
        """Request headers that carry these credentials."""
        raise NotImplementedError


class BasicAuth(_Credentials):
    """HTTP basic authentication."""

    type: Literal["basic"] = "basic"
    username: str
    password: str

    def headers(self) -> dict[str, str]:
        token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode("ascii")
        return {"Authorization": f"Basic {token}"}


class TokenAuth(_Credentials):
    """Bearer token authentication."""

    type: Literal["token"] = "token"
    token: str

    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class CustomHeaderAuth(_Credentials):
    """Arbitrary header name/value pair (API keys, session cookies)."""

    type: Literal["custom"] = "custom"
    header_name: str = Field(alias="headerName")
    header_value: str = Field(alias="headerValue")

    def headers(self) -> dict[str, str]:
        return {self.header_name: self.header_value}


class OAuthClientCredentials(_Credentials):
    """
    OAuth client credentials.

    Accepted in configuration, but never exchanged for a live access
    token, so requests go out without an Authorization header.
    """

    type: Literal["oauth"] = "oauth"
    client_id: str = Field(alias="clientId")
    client_secret: str = Field(alias="clientSecret")
    token_url: str = Field(alias="tokenUrl")

    def headers(self) -> dict[str, str]:
        logger.debug("OAuth token exchange is not supported, sending no credentials")
        return {}


AuthBinding = Annotated[
    Union[BasicAuth, TokenAuth, CustomHeaderAuth, OAuthClientCredentials],
    Field(discriminator="type"),
]

_binding_adapter: TypeAdapter[AuthBinding] = TypeAdapter(AuthBinding)


def parse_auth_binding(data: dict[str, Any]) -> AuthBinding:
    """
    Parse a credentials mapping into its typed variant.

    Raises:
        pydantic.ValidationError: Unknown ``type`` or missing fields
    """
    return _binding_adapter.validate_python(data)


@dataclass(frozen=True)
class AuthRule:
    """A URL pattern and the credentials to use for URLs matching it."""

    url_pattern: str
    binding: AuthBinding

    @classmethod
    def from_config(cls, data: dict[str, Any]) -> "AuthRule":
        """
        Create a rule from the config shape ``{urlPattern, type, ...fields}``.

        Raises:
            KeyError: If no URL pattern is given
            pydantic.ValidationError: If the credentials are invalid
        """
        fields = dict(data)
        pattern = fields.pop("urlPattern", None) or fields.pop("url_pattern")
        return cls(url_pattern=pattern, binding=parse_auth_binding(fields))


@dataclass(frozen=True)
class SourceEntry:
    """One configured documentation URL with its detected type and credentials."""

    url: str
    source_type: SourceType
    display_name: str
    auth: AuthBinding | None = None

    @property
    def auth_type(self) -> str | None:
        """Credential variant name, if any."""
        return self.auth.type if self.auth is not None else None

    def request_headers(self) -> dict[str, str]:
        """Headers carrying this entry's credentials."""
        return self.auth.headers() if self.auth is not None else {}
