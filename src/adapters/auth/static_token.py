"""
Static token session adapter - Implements AuthSession protocol.

Authenticates every request with a fixed client id and access token,
as issued out of band by the API's OAuth flow.
"""

import logging

logger = logging.getLogger(__name__)

CLIENT_ID_HEADER = "X-Client-ID"
ACCESS_TOKEN_HEADER = "X-Access-Token"


class StaticTokenSession:
    """
    Implements AuthSession protocol with fixed credentials.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Token issuance and refresh are handled elsewhere.
    """

    def __init__(self, client_id: str | None, access_token: str | None) -> None:
        self._client_id = client_id
        self._access_token = access_token

    def auth_headers(self) -> dict[str, str]:
        """
        Build the authentication headers.

        Returns:
            Client id and access token headers

        Raises:
            RuntimeError: Credentials are not configured
        """
        if not self._client_id or not self._access_token:
            raise RuntimeError(
                "API credentials are not set. Set CLIENT_ID and ACCESS_TOKEN in your .env."
            )
        return {
            CLIENT_ID_HEADER: self._client_id,
            ACCESS_TOKEN_HEADER: self._access_token,
        }

    def __repr__(self) -> str:
        # Never print the token
        return f"StaticTokenSession(client_id={self._client_id!r})"
