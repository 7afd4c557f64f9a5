"""Cloudflare API credentials and authentication headers.

See https://developers.cloudflare.com/fundamentals/api/get-started/ for the
two supported authentication schemes.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApiKey(BaseModel):
    """Global API key authentication (key plus account email)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal["api_key"] = "api_key"
    key: str = Field(min_length=1)
    email: str = Field(min_length=3)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        # Sent verbatim as X-Auth-Email, so never normalized
        if "@" not in value.strip("@"):
            raise ValueError("email must contain @")
        return value


class ApiToken(BaseModel):
    """Scoped API token authentication."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal["api_token"] = "api_token"
    token: str = Field(min_length=1)


Credential = Annotated[ApiKey | ApiToken, Field(discriminator="method")]


def auth_headers(credential: ApiKey | ApiToken) -> dict[str, str]:
    """Build the authentication headers for a credential.

    Args:
        credential: API key or API token credential

    Returns:
        Header name to value mapping

    Raises:
        TypeError: If the credential is of an unknown kind
    """
    if isinstance(credential, ApiKey):
        return {
            "X-Auth-Key": credential.key,
            "X-Auth-Email": credential.email,
        }
    if isinstance(credential, ApiToken):
        return {"Authorization": f"Bearer {credential.token}"}
    raise TypeError(f"Unsupported credential type: {type(credential).__name__}")
