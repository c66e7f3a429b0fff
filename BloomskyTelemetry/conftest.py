"""Shared fixtures: a recorded BloomSky API response."""
import json

import pytest


@pytest.fixture
def sample_observation():
    """One observation as returned by the BloomSky skydata API."""
    return {
        "UTC": 2,
        "CityName": "Namur",
        "Storm": {
            "UVIndex": "1",
            "WindDirection": "NE",
            "RainDaily": 0.1,
            "WindGust": 2.5,
            "SustainedWindSpeed": 1.3,
            "RainRate": 0.0,
            "24hRain": 0.2,
        },
        "Searchable": True,
        "DeviceName": "Garden",
        "RegisterTime": 1486905514,
        "DST": 1,
        "BoundedPoint": "",
        "LON": 4.86,
        "Point": {},
        "VideoList": ["http://s3.amazonaws.com/bskytimelapses/faBiuZWsnpaoqZqr_2_2017-05-31.mp4"],
        "VideoList_C": ["http://s3.amazonaws.com/bskytimelapses/faBiuZWsnpaoqZqr_2_2017-05-31_C.mp4"],
        "DeviceID": "442C05954A59",
        "NumOfFollowers": 2,
        "LAT": 50.46,
        "ALT": 173,
        "Data": {
            "Luminance": 9999,
            "Temperature": 70.2,
            "ImageURL": "http://s3-us-west-1.amazonaws.com/bskyimgs/faBiuZWsnpaoqZqrqJ1kr5qmr5OmqZs=.jpg",
            "TS": 1496345276,
            "Rain": False,
            "Humidity": 64,
            "Pressure": 29.99,
            "DeviceType": "SKY2",
            "Voltage": 2611,
            "Night": False,
            "UVIndex": 9999,
            "ImageTS": 1496345276,
        },
        "FullAddress": "Rue de Fer, Namur, Wallonie, BE",
        "StreetName": "Rue de Fer",
        "PreviewImageList": ["http://s3-us-west-1.amazonaws.com/bskyimgs/faBiuZWsnpaoqZqrqJ1kr5qmr5OmqZs=.jpg"],
    }


@pytest.fixture
def sample_body(sample_observation):
    """Raw response body: the observation wrapped in a one-element array."""
    return json.dumps([sample_observation]).encode("utf-8")
