"""Conversions between unit-sphere points, geographic coordinates and texture UVs.

World frame: +Y is north, longitude 0 points along +Z and grows toward +X.
Latitude/longitude are stored in radians; degrees are only a presentation.
"""
import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

import numpy as np

from quadsphere.math_utils import normalize

LAT_LIMIT_DEG = 90.0
LON_LIMIT_DEG = 180.0


class OutOfRangeError(ValueError):
    """A latitude or longitude outside the valid geographic domain."""


class TexCoord(NamedTuple):
    u: float
    v: float


@dataclass(frozen=True)
class GeoCoordinate:
    latitude: float  # radians, [-pi/2, pi/2]
    longitude: float  # radians, [-pi, pi]

    def as_degrees(self) -> Tuple[float, float]:
        return geo_to_degrees(self)

    @classmethod
    def from_degrees(cls, lat_deg: float, lon_deg: float) -> "GeoCoordinate":
        return geo_from_degrees(lat_deg, lon_deg)


def _check_latitude(lat_deg: float) -> None:
    if not (-LAT_LIMIT_DEG <= lat_deg <= LAT_LIMIT_DEG):
        raise OutOfRangeError(f"Invalid latitude: {lat_deg}")


def _check_longitude(lon_deg: float) -> None:
    if not (-LON_LIMIT_DEG <= lon_deg <= LON_LIMIT_DEG):
        raise OutOfRangeError(f"Invalid longitude: {lon_deg}")


def cartesian_to_geo(p) -> GeoCoordinate:
    x, y, z = normalize(p)
    # asin is undefined past |1|; normalization can overshoot by an ulp.
    latitude = math.asin(max(-1.0, min(1.0, float(y))))
    longitude = math.atan2(float(x), float(z))
    return GeoCoordinate(latitude, longitude)


def geo_to_degrees(g: GeoCoordinate) -> Tuple[float, float]:
    return math.degrees(g.latitude), math.degrees(g.longitude)


def geo_from_degrees(lat_deg: float, lon_deg: float) -> GeoCoordinate:
    _check_latitude(lat_deg)
    _check_longitude(lon_deg)
    return GeoCoordinate(math.radians(lat_deg), math.radians(lon_deg))


def geo_to_point_on_sphere(g: GeoCoordinate, radius: float) -> np.ndarray:
    y = math.sin(g.latitude)
    r = math.cos(g.latitude)
    x = r * math.sin(g.longitude)
    z = r * math.cos(g.longitude)
    return normalize((x, y, z)) * radius


def map_range(input_range: Tuple[float, float], output_range: Tuple[float, float], value: float) -> float:
    in0, in1 = input_range
    out0, out1 = output_range
    return out0 + (value - in0) * (out1 - out0) / (in1 - in0)


def map_latitude(lat_deg: float) -> float:
    # Linear in both hemispheres: north pole -> 0.0, equator -> 0.5, south pole -> 1.0.
    _check_latitude(lat_deg)
    if lat_deg >= 0.0:
        return map_range((90.0, 0.0), (0.0, 0.5), lat_deg)
    return map_range((0.0, -90.0), (0.5, 1.0), lat_deg)


def map_longitude(lon_deg: float) -> float:
    _check_longitude(lon_deg)
    if lon_deg <= 0.0:
        return map_range((-180.0, 0.0), (0.0, 0.5), lon_deg)
    return map_range((0.0, 180.0), (0.5, 1.0), lon_deg)


def geo_to_uv(g: GeoCoordinate) -> TexCoord:
    lat_deg, lon_deg = geo_to_degrees(g)
    return TexCoord(u=map_longitude(lon_deg), v=map_latitude(lat_deg))
