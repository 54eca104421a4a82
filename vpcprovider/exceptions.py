"""
Error taxonomy shared by the cloud client, the services and the routers.

Routers translate these into HTTP status codes; services never catch them
except where a compensating action is required.
"""

from typing import Optional


class ProviderError(Exception):
    """Base class for every error raised by the provider."""


class ClientConfigurationError(ProviderError):
    """The VPC SDK client could not be built (missing API key, bad URL, …)."""


class ConfigurationError(ProviderError):
    """A desired resource configuration violates a local constraint."""


class RemoteCallError(ProviderError):
    """
    A VPC API call failed.

    ``status_code`` mirrors the HTTP status returned by the service, or is
    ``None`` when the request never produced a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def not_found(self) -> bool:
        return self.status_code == 404


class ResourceGone(ProviderError):
    """The remote object behind a state record no longer exists."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(f"{resource_type} '{resource_id}' no longer exists.")
        self.resource_type = resource_type
        self.resource_id = resource_id


class UnknownVariantError(ProviderError):
    """A polymorphic API payload did not match any known variant."""
