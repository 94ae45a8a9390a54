"""
API key authentication.

Every request to the API must carry a valid key in the ``X-API-KEY``
header; the check runs before any view code touches the BOM store.
"""

from rest_framework import authentication, exceptions, permissions

from infrastructure.persistence.models import ApiKey

API_KEY_HEADER = 'X-API-KEY'


class ApiKeyAuthentication(authentication.BaseAuthentication):
    """
    Authenticate requests by the ``X-API-KEY`` header.

    Returns ``(None, key)`` on success: API clients are not Django users.
    """

    def authenticate(self, request):
        values = request.headers.get(API_KEY_HEADER)
        if values is None:
            raise exceptions.AuthenticationFailed('API Key is missing')

        # Repeated headers arrive comma-joined
        if ',' in values:
            raise exceptions.AuthenticationFailed('Invalid API Key')

        raw_key = values.strip()
        if not raw_key:
            raise exceptions.AuthenticationFailed('API Key is empty')

        if not ApiKey.objects.is_valid(raw_key):
            raise exceptions.AuthenticationFailed('Invalid API Key')

        return (None, raw_key)

    def authenticate_header(self, request):
        return API_KEY_HEADER


class HasApiKey(permissions.BasePermission):
    """Allow access only to requests authenticated by an API key."""

    message = 'Invalid API Key'

    def has_permission(self, request, view):
        return request.auth is not None
