"""BloomSky observation model - one immutable snapshot of a sky station."""
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

import bloomsky_units as units


class SnapshotSerializationError(Exception):
    """Raised when a constructed snapshot cannot be dumped back to JSON."""
    pass


# Field kinds understood by the decoder
FLOAT = "float"
STRING = "str"
BOOL = "bool"
STRING_LIST = "str_list"
RAW = "raw"

# (vendor key, attribute, kind). Order is the order of the debug dump.
TOP_LEVEL_FIELDS = (
    ("UTC", "utc", FLOAT),
    ("CityName", "city_name", STRING),
    ("Searchable", "searchable", BOOL),
    ("DeviceName", "device_name", STRING),
    ("RegisterTime", "register_time", FLOAT),
    ("DST", "dst", FLOAT),
    ("BoundedPoint", "bounded_point", STRING),
    ("LON", "lon", FLOAT),
    ("Point", "point", RAW),
    ("VideoList", "video_list", STRING_LIST),
    ("VideoList_C", "video_list_c", STRING_LIST),
    ("DeviceID", "device_id", STRING),
    ("NumOfFollowers", "num_of_followers", FLOAT),
    ("LAT", "lat", FLOAT),
    ("ALT", "alt", FLOAT),
    ("FullAddress", "full_address", STRING),
    ("StreetName", "street_name", STRING),
    ("PreviewImageList", "preview_image_list", STRING_LIST),
)

STORM_KEY = "Storm"
STORM_FIELDS = (
    ("UVIndex", "uv_index", STRING),
    ("WindDirection", "wind_direction", STRING),
    ("WindGust", "wind_gust_mph", FLOAT),
    ("SustainedWindSpeed", "sustained_wind_speed_mph", FLOAT),
    ("RainDaily", "rain_daily_in", FLOAT),
    ("RainRate", "rain_rate_in", FLOAT),
    ("24hRain", "rain_24h_in", FLOAT),
)

SKY_KEY = "Data"
SKY_FIELDS = (
    ("Luminance", "luminance", FLOAT),
    ("Temperature", "temperature_f", FLOAT),
    ("ImageURL", "image_url", STRING),
    ("TS", "ts", FLOAT),
    ("Rain", "rain", BOOL),
    ("Humidity", "humidity", FLOAT),
    ("Pressure", "pressure_inhg", FLOAT),
    ("DeviceType", "device_type", STRING),
    ("Voltage", "voltage", FLOAT),
    ("Night", "night", BOOL),
    ("UVIndex", "uv_index", FLOAT),
    ("ImageTS", "image_ts", FLOAT),
)

# (dump key, attribute) of derived values, written after the vendor fields
STORM_DERIVED = (
    ("WindGustms", "wind_gust_ms"),
    ("WindGustkmh", "wind_gust_kmh"),
    ("SustainedWindSpeedms", "sustained_wind_speed_ms"),
    ("SustainedWindSpeedkmh", "sustained_wind_speed_kmh"),
    ("RainDailymm", "rain_daily_mm"),
    ("RainRatemm", "rain_rate_mm"),
    ("Rainmm", "rain_24h_mm"),
)

SKY_DERIVED = (
    ("TemperatureC", "temperature_c"),
    ("Pressurehpa", "pressure_hpa"),
)

LAST_CALL_KEY = "LastCall"
LAST_CALL_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class StormData:
    """Wind and rain readings ("Storm" block), vendor units plus metric."""
    uv_index: str = ""  # e.g. "3", distinct from SkyData.uv_index
    wind_direction: str = ""  # compass point, e.g. "NE"
    wind_gust_mph: float = 0.0
    sustained_wind_speed_mph: float = 0.0
    rain_daily_in: float = 0.0
    rain_rate_in: float = 0.0
    rain_24h_in: float = 0.0

    # Derived, recomputed from the vendor value on every construction
    wind_gust_ms: float = field(default=0.0, init=False)
    wind_gust_kmh: float = field(default=0.0, init=False)
    sustained_wind_speed_ms: float = field(default=0.0, init=False)
    sustained_wind_speed_kmh: float = field(default=0.0, init=False)
    rain_daily_mm: float = field(default=0.0, init=False)
    rain_rate_mm: float = field(default=0.0, init=False)
    rain_24h_mm: float = field(default=0.0, init=False)

    def __post_init__(self):
        derived = {
            "wind_gust_ms": units.mph_to_ms(self.wind_gust_mph),
            "wind_gust_kmh": units.mph_to_kmh(self.wind_gust_mph),
            "sustained_wind_speed_ms": units.mph_to_ms(self.sustained_wind_speed_mph),
            "sustained_wind_speed_kmh": units.mph_to_kmh(self.sustained_wind_speed_mph),
            "rain_daily_mm": units.inches_to_mm(self.rain_daily_in),
            "rain_rate_mm": units.inches_to_mm(self.rain_rate_in),
            "rain_24h_mm": units.inches_to_mm(self.rain_24h_in),
        }
        for name, value in derived.items():
            object.__setattr__(self, name, value)


@dataclass(frozen=True)
class SkyData:
    """Sky sensor readings ("Data" block), vendor units plus metric."""
    luminance: float = 0.0
    temperature_f: float = 0.0
    image_url: str = ""
    ts: float = 0.0  # UNIX timestamp of the observation
    rain: bool = False
    humidity: float = 0.0  # percentage
    pressure_inhg: float = 0.0
    device_type: str = ""
    voltage: float = 0.0
    night: bool = False
    uv_index: float = 0.0
    image_ts: float = 0.0

    temperature_c: float = field(default=0.0, init=False)
    pressure_hpa: float = field(default=0.0, init=False)

    def __post_init__(self):
        object.__setattr__(self, "temperature_c", units.fahrenheit_to_celsius(self.temperature_f))
        object.__setattr__(self, "pressure_hpa", units.inhg_to_hpa(self.pressure_inhg))


@dataclass(frozen=True)
class TelemetrySnapshot:
    """
    One observation of a BloomSky station.

    Built by the decoder from a single API payload. A new observation is a
    new snapshot; nothing is merged into an existing one.
    """
    utc: float = 0.0  # station UTC offset, hours
    city_name: str = ""
    storm: StormData = field(default_factory=StormData)
    searchable: bool = False
    device_name: str = ""
    register_time: float = 0.0
    dst: float = 0.0
    bounded_point: str = ""
    lon: float = 0.0
    point: Any = None
    video_list: Tuple[str, ...] = ()
    video_list_c: Tuple[str, ...] = ()
    device_id: str = ""
    num_of_followers: float = 0.0
    lat: float = 0.0
    alt: float = 0.0
    data: SkyData = field(default_factory=SkyData)
    full_address: str = ""
    street_name: str = ""
    preview_image_list: Tuple[str, ...] = ()
    last_call: str = ""  # local time of decode, LAST_CALL_FORMAT; "" if never decoded

    def get_timestamp(self) -> datetime:
        """Observation time from Data.TS, as an aware UTC datetime."""
        return datetime.fromtimestamp(int(self.data.ts), tz=timezone.utc)

    def get_image_timestamp(self) -> datetime:
        return datetime.fromtimestamp(int(self.data.image_ts), tz=timezone.utc)

    def get_image_url(self) -> str:
        return self.data.image_url

    def get_city(self) -> str:
        return self.city_name

    def get_device_id(self) -> str:
        return self.device_id

    def get_device_name(self) -> str:
        return self.device_name

    def get_num_of_followers(self) -> int:
        return int(self.num_of_followers)

    def get_index_uv(self) -> str:
        """UV index from 1 to 11, as reported in the Storm block."""
        return self.storm.uv_index

    def get_uv_index_value(self) -> float:
        return self.data.uv_index

    def is_night(self) -> bool:
        return self.data.night

    def is_rain(self) -> bool:
        return self.data.rain

    def get_luminance(self) -> float:
        return self.data.luminance

    def get_voltage(self) -> float:
        return self.data.voltage

    def get_temperature_fahrenheit(self) -> float:
        return self.data.temperature_f

    def get_temperature_celsius(self) -> float:
        return self.data.temperature_c

    def get_humidity(self) -> float:
        return self.data.humidity

    def get_pressure_hpa(self) -> float:
        return self.data.pressure_hpa

    def get_pressure_inhg(self) -> float:
        return self.data.pressure_inhg

    def get_wind_direction(self) -> str:
        """Wind direction as a compass point (N, S, W, E, ...)."""
        return self.storm.wind_direction

    def get_wind_gust_mph(self) -> float:
        return self.storm.wind_gust_mph

    def get_wind_gust_ms(self) -> float:
        """
        Legacy wind gust view: mph * 1.61, unrounded.

        Not the same value as storm.wind_gust_ms (mph * 0.44704, rounded).
        """
        return units.legacy_mph_to_ms(self.storm.wind_gust_mph)

    def get_wind_gust_kmh(self) -> float:
        return self.storm.wind_gust_kmh

    def get_sustained_wind_speed_mph(self) -> float:
        return self.storm.sustained_wind_speed_mph

    def get_sustained_wind_speed_ms(self) -> float:
        """Legacy sustained wind view: mph * 1.61, unrounded."""
        return units.legacy_mph_to_ms(self.storm.sustained_wind_speed_mph)

    def get_sustained_wind_speed_kmh(self) -> float:
        return self.storm.sustained_wind_speed_kmh

    def get_rain_daily_in(self) -> float:
        return self.storm.rain_daily_in

    def get_rain_in(self) -> float:
        """Rain over the last 24 hours, inches."""
        return self.storm.rain_24h_in

    def get_rain_rate_in(self) -> float:
        return self.storm.rain_rate_in

    def get_rain_daily_mm(self) -> float:
        return self.storm.rain_daily_mm

    def get_rain_mm(self) -> float:
        return self.storm.rain_24h_mm

    def get_rain_rate_mm(self) -> float:
        return self.storm.rain_rate_mm

    def to_wire(self) -> dict:
        """Vendor-shaped dict of the whole record, derived values included."""
        wire = {}
        for key, attr, kind in TOP_LEVEL_FIELDS:
            value = getattr(self, attr)
            wire[key] = list(value) if kind == STRING_LIST else value
        wire[STORM_KEY] = _block_to_wire(self.storm, STORM_FIELDS, STORM_DERIVED)
        wire[SKY_KEY] = _block_to_wire(self.data, SKY_FIELDS, SKY_DERIVED)
        wire[LAST_CALL_KEY] = self.last_call
        return wire

    def show_pretty_all(self, logger: Optional[logging.Logger] = None) -> str:
        """
        Serialize the whole snapshot to indented JSON and log it at debug level.

        Raises:
            SnapshotSerializationError: If the record holds a value JSON
                cannot represent, which a decoded snapshot never does
        """
        logger = logger or logging.getLogger(__name__)
        try:
            out = json.dumps(self.to_wire(), indent=2)
        except (TypeError, ValueError) as e:
            logger.critical("Error serializing snapshot to JSON: %s", e)
            raise SnapshotSerializationError(f"Cannot serialize snapshot: {e}") from e
        logger.debug("Decode:>\n%s", out)
        return out


def _block_to_wire(block, vendor_fields, derived_fields) -> dict:
    wire = {key: getattr(block, attr) for key, attr, _ in vendor_fields}
    for key, attr in derived_fields:
        wire[key] = getattr(block, attr)
    return wire
