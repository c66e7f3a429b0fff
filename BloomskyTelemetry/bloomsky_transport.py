"""HTTP transport abstraction - the only place that talks to the network."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import requests


class TransportError(Exception):
    """Exception raised when a station request fails (network, auth, HTTP status)."""
    pass


class StationTransport(ABC):
    """Abstract fetch capability used by the client."""

    @abstractmethod
    def fetch(self, url: str, headers: Dict[str, List[str]]) -> bytes:
        """
        Fetch the raw body at url.

        Args:
            url: Endpoint URL
            headers: Header name to list of values

        Returns:
            bytes: Response body

        Raises:
            TransportError: If the request fails
        """
        pass


class RequestsTransport(StationTransport):
    """Transport backed by requests.get."""

    def __init__(self, timeout: int = 10, logger: Optional[logging.Logger] = None):
        """
        Args:
            timeout: HTTP request timeout in seconds
            logger: Logger for request diagnostics
        """
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def fetch(self, url: str, headers: Dict[str, List[str]]) -> bytes:
        flat_headers = {name: ", ".join(values) for name, values in headers.items()}

        try:
            self.logger.debug("GET %s (headers: %s)", url, sorted(flat_headers))
            response = requests.get(url, headers=flat_headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.debug("Network error during station request: %s", e)
            raise TransportError(f"Network error: {e}") from e

        self.logger.debug("Station response status: %s", response.status_code)
        if not response.ok:
            raise TransportError(
                f"HTTP {response.status_code}: {response.text[:200]}"
            )
        return response.content
