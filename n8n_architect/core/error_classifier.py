"""Transport error classifier for n8n Architect.

Turns exceptions raised before any HTTP response arrived into user-facing hints.
"""

import asyncio

import httpx

NETWORK_BLOCK_HINT = (
    "Cross-origin (CORS) block or network error. The n8n instance could not be "
    "reached from this client. Check that the URL is reachable from here and, "
    "when running from a browser origin, that the instance sends CORS headers "
    "allowing it."
)

# Message fragments produced by fetch-style transports when the request never left
# the client or the remote refused the connection outright.
_NETWORK_BLOCK_SIGNATURES = (
    "failed to fetch",
    "fetch failed",
    "networkerror",
    "network error",
    "all connection attempts failed",
    "connection refused",
    "name or service not known",
    "nodename nor servname",
)


class TransportErrorClassifier:
    """Classifies transport failures for connection validation.

    Static methods for stateless classification.
    """

    @staticmethod
    def is_network_block(error: BaseException) -> bool:
        """Check whether an error looks like a blocked or unreachable endpoint.

        Args:
            error: Exception raised by the transport

        Returns:
            True for connect-level failures and fetch-style "network" messages
        """
        if isinstance(error, httpx.ConnectError):
            return True

        error_str = str(error).lower()
        return any(signature in error_str for signature in _NETWORK_BLOCK_SIGNATURES)

    @staticmethod
    def describe(error: BaseException) -> str:
        """Build the human-readable message for a transport failure.

        Args:
            error: Exception raised by the transport

        Returns:
            The CORS/network hint, or a generic message carrying the error text
        """
        if TransportErrorClassifier.is_network_block(error):
            return NETWORK_BLOCK_HINT

        if isinstance(error, (asyncio.TimeoutError, httpx.TimeoutException)):
            return "Unexpected error: the n8n instance did not answer in time"

        return f"Unexpected error: {str(error) or type(error).__name__}"
