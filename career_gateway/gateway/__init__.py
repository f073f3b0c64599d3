"""
Upstream HRMS gateway: GraphQL client and query catalog.
"""

from .client import (
    GraphQLError,
    GraphQLResponse,
    HRMSClient,
    HRMSDecodeError,
    HRMSError,
    HRMSStatusError,
    HRMSTransportError,
    ProxyResponse,
)

__all__ = [
    "GraphQLError",
    "GraphQLResponse",
    "HRMSClient",
    "HRMSDecodeError",
    "HRMSError",
    "HRMSStatusError",
    "HRMSTransportError",
    "ProxyResponse",
]
