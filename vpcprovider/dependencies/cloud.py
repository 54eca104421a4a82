"""
FastAPI dependency handing each request an explicitly built VPC client.

The client is constructed from settings at call time so that credential
problems surface as a ``ClientConfigurationError`` on the request that needs
the API, not at import.
"""

from vpcprovider.cloud.vpc import VPCClient
from vpcprovider.config import settings


def get_vpc_client() -> VPCClient:
    return VPCClient.from_settings(settings)
