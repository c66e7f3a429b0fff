"""Tests for snapshot module."""
import dataclasses
import json
from datetime import datetime, timezone

import pytest

from bloomsky_snapshot import SkyData, SnapshotSerializationError, StormData, TelemetrySnapshot


@pytest.fixture
def snapshot():
    return TelemetrySnapshot(
        city_name="Namur",
        device_id="442C05954A59",
        device_name="Garden",
        num_of_followers=2.0,
        storm=StormData(
            uv_index="1",
            wind_direction="NE",
            wind_gust_mph=2.5,
            sustained_wind_speed_mph=1.3,
            rain_daily_in=0.1,
            rain_rate_in=0.0,
            rain_24h_in=0.2,
        ),
        data=SkyData(
            temperature_f=70.2,
            pressure_inhg=29.99,
            humidity=64.0,
            ts=1496345276.0,
            image_ts=1496345276.0,
            rain=True,
            night=False,
        ),
        last_call="2017-06-01 21:30:00",
    )


def test_zero_valued_snapshot():
    """A default snapshot has zero values everywhere, derived ones included."""
    empty = TelemetrySnapshot()

    assert empty.device_id == ""
    assert empty.last_call == ""
    assert empty.data.temperature_f == 0.0
    assert empty.data.temperature_c == -17.78
    assert empty.storm.wind_gust_ms == 0.0
    assert empty.video_list == ()


def test_derived_fields_computed_on_construction():
    storm = StormData(wind_gust_mph=2.5, sustained_wind_speed_mph=1.3, rain_daily_in=0.1, rain_24h_in=0.2)
    sky = SkyData(temperature_f=70.2, pressure_inhg=29.99)

    assert storm.wind_gust_ms == 1.12
    assert storm.wind_gust_kmh == 4.02
    assert storm.sustained_wind_speed_ms == 0.58
    assert storm.sustained_wind_speed_kmh == 2.09
    assert storm.rain_daily_mm == 2.54
    assert storm.rain_rate_mm == 0.0
    assert storm.rain_24h_mm == 5.08
    assert sky.temperature_c == 21.22
    assert sky.pressure_hpa == 1015.58


def test_derived_fields_cannot_be_set():
    with pytest.raises(TypeError):
        SkyData(temperature_f=70.2, temperature_c=0.0)

    sky = SkyData(temperature_f=70.2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        sky.temperature_c = 0.0


def test_replace_recomputes_derived_fields():
    sky = SkyData(temperature_f=70.2)
    warmer = dataclasses.replace(sky, temperature_f=212.0)

    assert warmer.temperature_c == 100.0
    assert sky.temperature_c == 21.22


def test_accessors(snapshot):
    assert snapshot.get_city() == "Namur"
    assert snapshot.get_device_id() == "442C05954A59"
    assert snapshot.get_device_name() == "Garden"
    assert snapshot.get_num_of_followers() == 2
    assert snapshot.get_index_uv() == "1"
    assert snapshot.is_rain() is True
    assert snapshot.is_night() is False
    assert snapshot.get_humidity() == 64.0
    assert snapshot.get_temperature_fahrenheit() == 70.2
    assert snapshot.get_temperature_celsius() == 21.22
    assert snapshot.get_pressure_inhg() == 29.99
    assert snapshot.get_pressure_hpa() == 1015.58
    assert snapshot.get_wind_direction() == "NE"
    assert snapshot.get_wind_gust_mph() == 2.5
    assert snapshot.get_wind_gust_kmh() == 4.02
    assert snapshot.get_sustained_wind_speed_mph() == 1.3
    assert snapshot.get_sustained_wind_speed_kmh() == 2.09
    assert snapshot.get_rain_daily_in() == 0.1
    assert snapshot.get_rain_rate_in() == 0.0
    assert snapshot.get_rain_in() == 0.2
    assert snapshot.get_rain_daily_mm() == 2.54
    assert snapshot.get_rain_rate_mm() == 0.0
    assert snapshot.get_rain_mm() == 5.08


def test_legacy_wind_accessors(snapshot):
    """Legacy m/s accessors use the unrounded 1.61 factor."""
    assert snapshot.get_wind_gust_ms() == 2.5 * 1.61
    assert snapshot.get_sustained_wind_speed_ms() == 1.3 * 1.61
    assert snapshot.get_wind_gust_ms() != snapshot.storm.wind_gust_ms
    assert snapshot.get_wind_gust_ms() != snapshot.get_wind_gust_kmh()


def test_get_timestamp(snapshot):
    expected = datetime(2017, 6, 1, 19, 27, 56, tzinfo=timezone.utc)
    assert snapshot.get_timestamp() == expected
    assert snapshot.get_image_timestamp() == expected


def test_to_wire_includes_derived_fields(snapshot):
    wire = snapshot.to_wire()

    assert wire["CityName"] == "Namur"
    assert wire["LastCall"] == "2017-06-01 21:30:00"
    assert wire["Data"]["Temperature"] == 70.2
    assert wire["Data"]["TemperatureC"] == 21.22
    assert wire["Data"]["Pressurehpa"] == 1015.58
    assert wire["Storm"]["24hRain"] == 0.2
    assert wire["Storm"]["Rainmm"] == 5.08
    assert wire["Storm"]["WindGustms"] == 1.12
    assert wire["VideoList"] == []


def test_show_pretty_all(snapshot):
    out = snapshot.show_pretty_all()

    assert json.loads(out) == snapshot.to_wire()


def test_show_pretty_all_unserializable():
    broken = TelemetrySnapshot(point=object())

    with pytest.raises(SnapshotSerializationError):
        broken.show_pretty_all()
