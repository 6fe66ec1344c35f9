"""
Service API Key Authentication

Validates the API key of internal services, such as the invitee matcher that
reports resolution outcomes.
"""

import secrets

from fastapi import Header, status

from config import ApplicationConfig
from src.api.error import ClientError
from src.shared.result import Error


async def verify_service_api_key(x_service_api_key: str = Header(None)):
    """
    Verify service API key from X-Service-API-Key header.

    Different from user JWT authentication - this is service-to-service auth.

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if not x_service_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Service API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(x_service_api_key, ApplicationConfig.SERVICE_API_KEY):
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid service API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
