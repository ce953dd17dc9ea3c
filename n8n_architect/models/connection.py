"""Connection config model for n8n Architect.

Holds the base URL and API key of the user's n8n instance.
"""

from typing import Any, Dict
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_base_url(value: str) -> str:
    """Normalize a user-typed instance URL.

    Trims whitespace, assumes https:// when no scheme is given and drops trailing slashes.

    Raises:
        ValueError: If the result is not an absolute http(s) URL
    """
    url = value.strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    url = url.rstrip("/")

    parsed = urlparse(url)
    if not parsed.netloc:
        raise ValueError(f"Invalid n8n URL: {value!r}")
    return url


class ConnectionConfig(BaseModel):
    """Connection to a remote n8n instance.

    Immutable: replaced wholesale on save, never field-mutated.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    base_url: str = Field(..., alias="baseUrl", min_length=1, description="Instance URL without trailing slash")
    api_key: str = Field(..., alias="apiKey", min_length=1, repr=False, description="n8n public API key")

    @field_validator("base_url", mode="before")
    @classmethod
    def _normalize_base_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_base_url(value)
        return value

    @field_validator("api_key", mode="before")
    @classmethod
    def _strip_api_key(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def masked_api_key(self) -> str:
        """API key with everything but the last four characters hidden."""
        if len(self.api_key) <= 4:
            return "****"
        return "****" + self.api_key[-4:]

    def to_storage(self) -> Dict[str, str]:
        """Serialize to the persisted {baseUrl, apiKey} record."""
        return self.model_dump(by_alias=True)
