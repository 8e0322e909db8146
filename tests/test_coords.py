"""
Tests for the coordinate conversions used to texture the quadsphere.

Covers:
1. Cartesian -> geographic conversion and its range
2. Degree validation and conversion
3. Latitude/longitude -> UV mapping, including bounds errors
4. Geographic -> Cartesian round trip
"""

import math

import numpy as np
import pytest

from quadsphere.coords import (
    GeoCoordinate,
    OutOfRangeError,
    TexCoord,
    cartesian_to_geo,
    geo_from_degrees,
    geo_to_degrees,
    geo_to_point_on_sphere,
    geo_to_uv,
    map_latitude,
    map_longitude,
    map_range,
)


class TestCartesianToGeo:
    """Tests for cartesian_to_geo"""

    def test_axis_points(self) -> None:
        north = cartesian_to_geo((0.0, 1.0, 0.0))
        assert north.latitude == pytest.approx(math.pi / 2)

        front = cartesian_to_geo((0.0, 0.0, 1.0))
        assert front.latitude == pytest.approx(0.0)
        assert front.longitude == pytest.approx(0.0)

        east = cartesian_to_geo((1.0, 0.0, 0.0))
        assert east.longitude == pytest.approx(math.pi / 2)

        back = cartesian_to_geo((0.0, 0.0, -1.0))
        assert abs(back.longitude) == pytest.approx(math.pi)

    def test_input_is_normalized_first(self) -> None:
        a = cartesian_to_geo((0.3, -0.4, 0.5))
        b = cartesian_to_geo((3.0, -4.0, 5.0))
        assert a.latitude == pytest.approx(b.latitude)
        assert a.longitude == pytest.approx(b.longitude)

    def test_results_stay_in_domain(self) -> None:
        rng = np.random.default_rng(0)
        for p in rng.normal(size=(500, 3)):
            g = cartesian_to_geo(p)
            assert -math.pi / 2 <= g.latitude <= math.pi / 2
            assert -math.pi <= g.longitude <= math.pi

    def test_zero_vector_rejected(self) -> None:
        with pytest.raises(ValueError):
            cartesian_to_geo((0.0, 0.0, 0.0))


class TestDegrees:
    """Tests for degree conversions"""

    def test_to_degrees(self) -> None:
        lat, lon = geo_to_degrees(GeoCoordinate(math.pi / 4, -math.pi / 2))
        assert lat == pytest.approx(45.0)
        assert lon == pytest.approx(-90.0)

    def test_from_degrees(self) -> None:
        g = geo_from_degrees(30.0, -120.0)
        assert g.latitude == pytest.approx(math.radians(30.0))
        assert g.longitude == pytest.approx(math.radians(-120.0))
        assert g.as_degrees() == pytest.approx((30.0, -120.0))

    def test_from_degrees_accepts_bounds(self) -> None:
        GeoCoordinate.from_degrees(90.0, 180.0)
        GeoCoordinate.from_degrees(-90.0, -180.0)

    @pytest.mark.parametrize("lat,lon", [(90.5, 0.0), (-91.0, 0.0), (0.0, 180.1), (0.0, -181.0)])
    def test_from_degrees_out_of_range(self, lat: float, lon: float) -> None:
        with pytest.raises(OutOfRangeError):
            geo_from_degrees(lat, lon)


class TestMapping:
    """Tests for the planar UV mapping"""

    def test_map_range(self) -> None:
        assert map_range((0.0, 10.0), (0.0, 1.0), 5.0) == pytest.approx(0.5)
        assert map_range((90.0, 0.0), (0.0, 0.5), 45.0) == pytest.approx(0.25)

    def test_latitude_anchor_points(self) -> None:
        assert map_latitude(90.0) == pytest.approx(0.0)
        assert map_latitude(0.0) == pytest.approx(0.5)
        assert map_latitude(-90.0) == pytest.approx(1.0)
        assert map_latitude(45.0) == pytest.approx(0.25)
        assert map_latitude(-45.0) == pytest.approx(0.75)

    def test_latitude_monotonic(self) -> None:
        values = [map_latitude(lat) for lat in np.linspace(90.0, -90.0, 181)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    def test_longitude_anchor_points(self) -> None:
        assert map_longitude(-180.0) == pytest.approx(0.0)
        assert map_longitude(0.0) == pytest.approx(0.5)
        assert map_longitude(180.0) == pytest.approx(1.0)
        assert map_longitude(90.0) == pytest.approx(0.75)

    def test_longitude_monotonic(self) -> None:
        values = [map_longitude(lon) for lon in np.linspace(-180.0, 180.0, 361)]
        assert all(b >= a for a, b in zip(values, values[1:]))

    @pytest.mark.parametrize("lat", [91.0, -91.0])
    def test_latitude_out_of_range(self, lat: float) -> None:
        with pytest.raises(OutOfRangeError):
            map_latitude(lat)

    @pytest.mark.parametrize("lon", [181.0, -181.0])
    def test_longitude_out_of_range(self, lon: float) -> None:
        with pytest.raises(OutOfRangeError):
            map_longitude(lon)

    def test_geo_to_uv(self) -> None:
        assert geo_to_uv(GeoCoordinate(0.0, 0.0)) == pytest.approx((0.5, 0.5))
        uv = geo_to_uv(geo_from_degrees(90.0, -180.0))
        assert isinstance(uv, TexCoord)
        assert uv.u == pytest.approx(0.0)
        assert uv.v == pytest.approx(0.0)

    def test_geo_to_uv_propagates_range_error(self) -> None:
        with pytest.raises(OutOfRangeError):
            geo_to_uv(GeoCoordinate(math.radians(100.0), 0.0))
        with pytest.raises(OutOfRangeError):
            geo_to_uv(GeoCoordinate(0.0, math.radians(200.0)))

    def test_uv_always_in_unit_square(self) -> None:
        rng = np.random.default_rng(1)
        for p in rng.normal(size=(500, 3)):
            u, v = geo_to_uv(cartesian_to_geo(p))
            assert 0.0 <= u <= 1.0
            assert 0.0 <= v <= 1.0


class TestPointOnSphere:
    """Tests for geo_to_point_on_sphere"""

    def test_length_is_radius(self) -> None:
        p = geo_to_point_on_sphere(geo_from_degrees(12.0, 34.0), 300.0)
        assert np.linalg.norm(p) == pytest.approx(300.0)

    def test_pole_and_origin_meridian(self) -> None:
        assert geo_to_point_on_sphere(geo_from_degrees(90.0, 0.0), 2.0) == pytest.approx([0.0, 2.0, 0.0], abs=1e-12)
        assert geo_to_point_on_sphere(geo_from_degrees(0.0, 0.0), 2.0) == pytest.approx([0.0, 0.0, 2.0], abs=1e-12)

    def test_round_trip(self) -> None:
        for lat in np.linspace(-80.0, 80.0, 9):
            for lon in np.linspace(-170.0, 170.0, 11):
                g = geo_from_degrees(lat, lon)
                back = cartesian_to_geo(geo_to_point_on_sphere(g, 300.0))
                assert back.latitude == pytest.approx(g.latitude, abs=1e-9)
                assert back.longitude == pytest.approx(g.longitude, abs=1e-9)

    def test_round_trip_at_seam(self) -> None:
        for lon in (180.0, -180.0):
            back = cartesian_to_geo(geo_to_point_on_sphere(geo_from_degrees(10.0, lon), 1.0))
            assert back.latitude == pytest.approx(math.radians(10.0))
            assert abs(back.longitude) == pytest.approx(math.pi)
