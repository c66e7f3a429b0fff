"""BloomSky station client: bounded-retry fetch followed by decode."""
import logging
import time
from datetime import datetime
from typing import Callable, Optional

from bloomsky_decoder import decode_snapshot
from bloomsky_snapshot import TelemetrySnapshot
from bloomsky_transport import RequestsTransport, StationTransport, TransportError

DEFAULT_URL = "https://api.bloomsky.com/api/skydata/"
MAX_ATTEMPTS = 5
RETRY_DELAY_SECONDS = 300  # 5 minutes


class BloomskyClient:
    """
    Fetches the current observation of one station.

    Transport failures are retried a fixed number of times with a fixed
    delay. When every attempt fails the client carries on with the body of
    its last successful fetch (or nothing), so a flaky network never stops
    the caller. Decode errors are not retried and always propagate.
    """

    def __init__(
        self,
        transport: Optional[StationTransport] = None,
        logger: Optional[logging.Logger] = None,
        max_attempts: int = MAX_ATTEMPTS,
        retry_delay_seconds: float = RETRY_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the client.

        Args:
            transport: Network transport (defaults to RequestsTransport)
            logger: Logger for fetch and decode messages
            max_attempts: Total fetch attempts before giving up
            retry_delay_seconds: Blocking delay after each failed attempt
            sleep: Sleep function used for the retry delay
            clock: Current-time source for the snapshot's last_call
        """
        self.logger = logger or logging.getLogger(__name__)
        self.transport = transport or RequestsTransport(logger=self.logger)
        self.max_attempts = max_attempts
        self.retry_delay_seconds = retry_delay_seconds
        self.sleep = sleep
        self.clock = clock

        self._body: bytes = b""

    def fetch_body(self, url: str, token: str) -> bytes:
        """
        Fetch the raw payload, retrying on transport errors.

        Returns:
            bytes: The fresh body, or the previously held one (possibly
                empty) if every attempt failed
        """
        self.logger.debug("Get from Rest bloomsky API %s", url)
        headers = {"Authorization": [token]}

        last_error = None
        for attempt in range(self.max_attempts):
            try:
                self._body = self.transport.fetch(url, headers)
                self.logger.debug("Bloomsky fetch attempt %d/%d succeeded", attempt + 1, self.max_attempts)
                return self._body
            except TransportError as e:
                last_error = e
                self.logger.error(
                    "Problem with call rest, check the URL and the secret ID in the config file "
                    "(attempt %d/%d): %s",
                    attempt + 1,
                    self.max_attempts,
                    e,
                )
                if attempt < self.max_attempts - 1:
                    self.logger.info("Retrying in %ss...", self.retry_delay_seconds)
                    self.sleep(self.retry_delay_seconds)

        self.logger.error(
            "Failed to fetch from bloomsky after %d attempts, continuing with %s: %s",
            self.max_attempts,
            "previous data" if self._body else "no data",
            last_error,
        )
        return self._body

    def fetch_snapshot(self, url: str, token: str) -> TelemetrySnapshot:
        """
        Fetch and decode the current observation.

        last_call is the decode time, not the observation time: when every
        attempt fails, a reused client re-decodes its previous body and
        stamps it with a fresh last_call. Use data.ts (get_timestamp()) to
        judge how fresh the observation is.

        Returns:
            TelemetrySnapshot: Decoded observation; zero-valued if no payload
                was ever obtained

        Raises:
            SnapshotDecodeError: If the payload has an unexpected shape
        """
        body = self.fetch_body(url, token)
        if not body:
            self.logger.warning("No bloomsky payload available, returning an empty snapshot")
            return TelemetrySnapshot()
        return decode_snapshot(body, clock=self.clock, logger=self.logger)


def fetch_snapshot(
    url: str,
    token: str,
    transport: Optional[StationTransport] = None,
    logger: Optional[logging.Logger] = None,
    **client_options,
) -> TelemetrySnapshot:
    """Fetch one snapshot with a fresh client; see BloomskyClient.fetch_snapshot."""
    client = BloomskyClient(transport=transport, logger=logger, **client_options)
    return client.fetch_snapshot(url, token)
