"""Command-line entry point: fetch one BloomSky observation and print it."""
import argparse
import logging
import os
import sys
from typing import Optional, Sequence, Tuple

from dotenv import load_dotenv

from bloomsky_client import DEFAULT_URL, MAX_ATTEMPTS, RETRY_DELAY_SECONDS, BloomskyClient
from bloomsky_decoder import SnapshotDecodeError, decode_snapshot
from bloomsky_logging import DEFAULT_LOG_FILE, DESTINATIONS, FILE, build_logger
from bloomsky_snapshot import TelemetrySnapshot
from bloomsky_transport import RequestsTransport


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("BloomSky station telemetry")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--log-destination", choices=DESTINATIONS, default=FILE)
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--max-retries", type=int, default=MAX_ATTEMPTS)
    parser.add_argument("--retry-delay", type=float, default=RETRY_DELAY_SECONDS, help="Seconds between retries")
    parser.add_argument("--from-file", help="Decode a saved API response instead of calling the API")
    parser.add_argument("--dump", action="store_true", help="Print the whole snapshot as JSON")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def load_config() -> Tuple[str, str]:
    load_dotenv()
    url = os.getenv("BLOOMSKY_URL", DEFAULT_URL)
    token = os.getenv("BLOOMSKY_TOKEN")

    if not token:
        raise SystemExit("Missing BLOOMSKY_TOKEN in environment")
    return url, token


def format_snapshot_lines(snapshot: TelemetrySnapshot) -> Tuple[str, ...]:
    return (
        f"{snapshot.get_device_name() or snapshot.get_device_id()} ({snapshot.get_city()})",
        f"Temp {snapshot.get_temperature_celsius():.2f}°C / {snapshot.get_temperature_fahrenheit()}°F"
        f"  Hum {snapshot.get_humidity():.0f}%"
        f"  Pressure {snapshot.get_pressure_hpa():.2f}hPa",
        f"Wind {snapshot.get_wind_direction()} {snapshot.storm.sustained_wind_speed_ms:.2f}m/s"
        f" gust {snapshot.storm.wind_gust_ms:.2f}m/s",
        f"Rain {'yes' if snapshot.is_rain() else 'no'}  daily {snapshot.get_rain_daily_mm():.2f}mm"
        f"  rate {snapshot.get_rain_rate_mm():.2f}mm  24h {snapshot.get_rain_mm():.2f}mm",
        f"Last call {snapshot.last_call or 'never'}",
    )


def read_snapshot(args: argparse.Namespace, logger: logging.Logger) -> TelemetrySnapshot:
    if args.from_file:
        logger.info("Decoding saved payload %s", args.from_file)
        with open(args.from_file, "rb") as f:
            return decode_snapshot(f.read(), logger=logger)

    url, token = load_config()
    client = BloomskyClient(
        transport=RequestsTransport(timeout=args.timeout, logger=logger),
        logger=logger,
        max_attempts=args.max_retries,
        retry_delay_seconds=args.retry_delay,
    )
    logger.info("Fetching bloomsky observation from %s", url)
    return client.fetch_snapshot(url, token)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logger = build_logger(args.log_destination, args.log_file, args.verbose)

    try:
        snapshot = read_snapshot(args, logger)
    except SnapshotDecodeError as err:
        logger.critical("Bloomsky payload could not be decoded, check the URL in the config: %s", err)
        print(f"Error: {err}", file=sys.stderr)
        return 1
    except OSError as err:
        logger.critical("Could not read saved payload: %s", err)
        print(f"Error: {err}", file=sys.stderr)
        return 1

    if args.dump:
        print(snapshot.show_pretty_all(logger))
    else:
        for line in format_snapshot_lines(snapshot):
            print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
