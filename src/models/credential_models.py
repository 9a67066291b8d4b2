"""Eddie Surf API credential models.

The credential descriptor is static data: which header carries which
credential field, and which request proves the credential works. The HTTP
client reads it; nothing here talks to the network.
"""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from src.constants import API_KEY_HEADER, DEFAULT_EDDIE_BASE_URL, HEALTH_PATH
from src.models.node_description import NodeProperty
from src.models.request_models import HttpRequestDescriptor


class EddieCredentials(BaseModel):
    """API key and base URL used to authenticate outbound requests."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    api_key: SecretStr = Field(..., alias="apiKey")
    base_url: str = Field(default=DEFAULT_EDDIE_BASE_URL, alias="baseUrl")

    @field_validator("api_key")
    @classmethod
    def _api_key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("API key is required")
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        return value.rstrip("/") if value else DEFAULT_EDDIE_BASE_URL


class CredentialDescriptor(BaseModel):
    """Declarative credential type consumed by an authenticated HTTP client."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str
    documentation_url: str
    properties: list[NodeProperty]
    # header name -> credential field whose value it carries
    header_fields: dict[str, str]
    test_path: str = HEALTH_PATH

    def authentication_headers(self, credentials: EddieCredentials) -> dict[str, str]:
        """Render the headers injected into every authenticated request."""
        headers: dict[str, str] = {}
        for header, field_name in self.header_fields.items():
            value = getattr(credentials, field_name)
            if isinstance(value, SecretStr):
                value = value.get_secret_value()
            headers[header] = str(value)
        return headers

    def test_request(self) -> HttpRequestDescriptor:
        """Request used to check that a credential is accepted."""
        return HttpRequestDescriptor(method="GET", path=self.test_path)


EDDIE_API_CREDENTIAL = CredentialDescriptor(
    name="eddieApi",
    display_name="Eddie Surf API",
    documentation_url="https://eddie.surf/docs",
    properties=[
        NodeProperty(
            display_name="API Key",
            name="apiKey",
            type="string",
            default="",
            required=True,
            secret=True,
            description="Your Eddie Surf API key from your dashboard",
        ),
        NodeProperty(
            display_name="Base URL",
            name="baseUrl",
            type="string",
            default=DEFAULT_EDDIE_BASE_URL,
            description="The base URL for the Eddie Surf API",
        ),
    ],
    header_fields={API_KEY_HEADER: "api_key"},
)
