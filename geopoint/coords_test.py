# Copyright 2025 DeepMind Technologies Limited.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for coordinates."""

import dataclasses
import math

from absl.testing import absltest
from absl.testing import parameterized
from geopoint import config as config_lib
from geopoint import coords
from geopoint import ellipsoids
from geopoint import errors
from geopoint import lambert
import numpy as np
import utm

LAT, LON = 37.42104, -121.85831  # San Jose, CA.
NORCAL = dict(
    first_std_parallel=33.33333,
    second_std_parallel=38.6666,
    latitude_of_origin=35.5,
    longitude_of_origin=-122,
    false_easting=2_000_000,
    false_northing=0,
)


def _random_points(n, seed, lat_range=(-79.9, 83.9)):
  """Random points inside the UTM limits, skipping undefined Svalbard zones."""
  rng = np.random.default_rng(seed)
  points = []
  while len(points) < n:
    lat = rng.uniform(*lat_range)
    lon = rng.uniform(-180, 180)
    if 72 <= lat < 84 and not 0 <= lon < 42:
      continue
    points.append((lat, lon))
  return points


class GeodeticPointTest(parameterized.TestCase):

  def test_make_geodetic_point(self):
    point = coords.make_geodetic_point(LAT, LON)
    self.assertEqual(point.kind, coords.PointKind.GEODETIC)
    self.assertEqual((point.latitude, point.longitude), (LAT, LON))
    self.assertIs(point.ellipsoid, ellipsoids.WGS84)

  def test_datum(self):
    point = coords.make_geodetic_point(LAT, LON, "Clarke 1866")
    self.assertEqual(point.ellipsoid.name, "Clarke 1866")

  def test_unknown_datum(self):
    with self.assertRaises(errors.UnknownDatumError):
      coords.make_geodetic_point(LAT, LON, "NAD 27")

  @parameterized.parameters((180.0, -180.0), (-180.0, -180.0), (190.0, -170.0),
                            (-181.0, 179.0))
  def test_longitude_is_normalized(self, lon, expected):
    point = coords.GeodeticPoint(10.0, lon)
    self.assertAlmostEqual(point.longitude, expected, places=9)

  def test_longitude_just_below_minus_180(self):
    point = coords.GeodeticPoint(10.0, math.nextafter(-180.0, -math.inf))
    self.assertEqual(point.longitude, -180.0)
    self.assertEqual(coords.geodetic_to_utm(point).zone, "1P")

  @parameterized.parameters(90.0001, -91.0)
  def test_invalid_latitude(self, lat):
    with self.assertRaises(errors.InvalidLatitudeError):
      coords.make_geodetic_point(lat, 0.0)

  def test_is_immutable(self):
    point = coords.make_geodetic_point(LAT, LON)
    with self.assertRaises(dataclasses.FrozenInstanceError):
      point.latitude = 0.0

  def test_str(self):
    self.assertEqual(str(coords.make_geodetic_point(LAT, LON)),
                     "Latitude: 37.42104, Longitude: -121.85831")


class UtmTest(parameterized.TestCase):

  def test_geodetic_to_utm(self):
    point = coords.make_geodetic_point(LAT, LON)
    utm_point = coords.geodetic_to_utm(point)
    self.assertEqual(utm_point.kind, coords.PointKind.UTM)
    np.testing.assert_allclose((utm_point.easting, utm_point.northing),
                               (601021.995134, 4142193.02983), atol=1e-4)
    self.assertEqual(utm_point.zone, "10S")
    self.assertEqual(utm_point.zone_number, 10)
    self.assertEqual(utm_point.zone_letter, "S")
    self.assertEqual(utm_point.longitude_of_origin, -123.0)
    self.assertEqual(utm_point.latitude_of_origin, LAT)
    self.assertEqual(utm_point.epsg, "EPSG:32610")

  def test_geodetic_to_local_tm(self):
    point = coords.make_geodetic_point(LAT, LON)
    utm_point = coords.geodetic_to_utm(point, longitude_of_origin=-122)
    np.testing.assert_allclose((utm_point.easting, utm_point.northing),
                               (12537.1687295, 4141590.78955), atol=1e-4)
    self.assertEqual(utm_point.zone, "10S")
    self.assertEqual(utm_point.longitude_of_origin, -122.0)

  def test_local_tm_west_of_origin_is_negative(self):
    point = coords.make_geodetic_point(LAT, -122.5)
    utm_point = coords.geodetic_to_utm(point, longitude_of_origin=-122)
    self.assertLess(utm_point.easting, 0.0)

  def test_utm_to_geodetic(self):
    utm_point = coords.make_utm_point(601021.995134, 4142193.02983, "10S")
    point = coords.utm_to_geodetic(utm_point)
    self.assertEqual(point.kind, coords.PointKind.GEODETIC)
    np.testing.assert_allclose((point.latitude, point.longitude), (LAT, LON),
                               atol=1e-6)

  def test_utm_round_trip_from_utm(self):
    utm_point = coords.make_utm_point(601021.995134, 4142193.02983, "10S")
    new_utm = coords.geodetic_to_utm(coords.utm_to_geodetic(utm_point))
    np.testing.assert_allclose((new_utm.easting, new_utm.northing),
                               (utm_point.easting, utm_point.northing),
                               atol=1e-4)
    self.assertEqual(new_utm.zone, "10S")

  def test_local_tm_round_trip(self):
    point = coords.make_geodetic_point(LAT, LON)
    utm_point = coords.geodetic_to_utm(point, longitude_of_origin=-122)
    new_point = coords.utm_to_geodetic(utm_point, longitude_of_origin=-122)
    np.testing.assert_allclose((new_point.latitude, new_point.longitude),
                               (LAT, LON), atol=1e-5)

  @parameterized.parameters(0, 1, 2)
  def test_utm_round_trip(self, seed):
    for lat, lon in _random_points(200, seed):
      point = coords.make_geodetic_point(lat, lon)
      new_point = coords.utm_to_geodetic(coords.geodetic_to_utm(point))
      np.testing.assert_allclose(new_point.latitude, lat, atol=1e-5,
                                 err_msg=f"{lat}, {lon}")
      dlon = (new_point.longitude - lon + 180) % 360 - 180
      np.testing.assert_allclose(dlon, 0.0, atol=1e-5, err_msg=f"{lat}, {lon}")

  @parameterized.parameters(0, 1)
  def test_local_tm_round_trip_random(self, seed):
    rng = np.random.default_rng(seed)
    for lat, lon in _random_points(200, seed, lat_range=(-84, 84)):
      origin = lon + rng.uniform(-3, 3)
      point = coords.make_geodetic_point(lat, lon)
      utm_point = coords.geodetic_to_utm(point, longitude_of_origin=origin)
      new_point = coords.utm_to_geodetic(utm_point, longitude_of_origin=origin)
      np.testing.assert_allclose(new_point.latitude, lat, atol=1e-5)
      dlon = (new_point.longitude - lon + 180) % 360 - 180
      np.testing.assert_allclose(dlon, 0.0, atol=1e-5)

  def test_local_tm_has_no_hemisphere_offset(self):
    point = coords.make_geodetic_point(-LAT, LON)
    local = coords.geodetic_to_utm(point, longitude_of_origin=-122)
    standard = coords.geodetic_to_utm(point)
    self.assertLess(local.northing, 0.0)
    self.assertGreater(standard.northing, 5_000_000.0)
    self.assertEqual(standard.zone, "10H")
    self.assertTrue(standard.is_southern)
    self.assertEqual(standard.epsg, "EPSG:32710")

  def test_local_tm_positive_northing_is_northern(self):
    point = coords.make_geodetic_point(-LAT, LON)
    local = coords.geodetic_to_utm(point, longitude_of_origin=-122)
    flipped = coords.make_utm_point(local.easting, -local.northing,
                                    (local.latitude_of_origin, -122.0))
    new_point = coords.utm_to_geodetic(flipped, longitude_of_origin=-122)
    self.assertAlmostEqual(new_point.latitude, LAT, places=5)

  @parameterized.parameters(
      (-33.9, 18.4),
      (51.5074, -0.1278),
      (35.6895, 139.6917),
      (-54.8, -68.3),
  )
  def test_matches_utm_library(self, lat, lon):
    utm_point = coords.geodetic_to_utm(coords.make_geodetic_point(lat, lon))
    easting, northing, zone_number, zone_letter = utm.from_latlon(lat, lon)
    np.testing.assert_allclose((utm_point.easting, utm_point.northing),
                               (easting, northing), atol=1e-3)
    self.assertEqual(utm_point.zone, f"{zone_number}{zone_letter}")

  @parameterized.parameters(
      ((60.0, 5.0), "32V", 9.0),
      ((75.0, 10.0), "33X", 15.0),
      ((75.0, 8.0), "31X", 3.0),
      ((58.0, 2.0), "31V", 3.0),
  )
  def test_exception_zones(self, latlon, zone, origin):
    utm_point = coords.geodetic_to_utm(coords.make_geodetic_point(*latlon))
    self.assertEqual(utm_point.zone, zone)
    self.assertEqual(utm_point.longitude_of_origin, origin)
    new_point = coords.utm_to_geodetic(utm_point)
    np.testing.assert_allclose((new_point.latitude, new_point.longitude),
                               latlon, atol=1e-5)

  def test_undefined_svalbard_zone(self):
    point = coords.make_geodetic_point(75.0, -100.0)
    with self.assertRaises(errors.UndefinedZoneError):
      coords.geodetic_to_utm(point)
    local = coords.geodetic_to_utm(point, longitude_of_origin=-100.0)
    self.assertEqual(local.zone, "")
    self.assertIsNone(local.epsg)
    new_point = coords.utm_to_geodetic(local, longitude_of_origin=-100.0)
    np.testing.assert_allclose((new_point.latitude, new_point.longitude),
                               (75.0, -100.0), atol=1e-5)

  def test_outside_utm_limits(self):
    point = coords.make_geodetic_point(-82.0, 20.0)
    with self.assertLogs(logger="absl", level="WARNING"):
      utm_point = coords.geodetic_to_utm(point)
    self.assertEqual(utm_point.zone_letter, "Z")
    self.assertIsNone(utm_point.epsg)
    self.assertTrue(utm_point.is_southern)
    new_point = coords.utm_to_geodetic(utm_point)
    np.testing.assert_allclose((new_point.latitude, new_point.longitude),
                               (-82.0, 20.0), atol=1e-5)

  def test_make_utm_point_from_zone(self):
    utm_point = coords.make_utm_point(8583143, 3742104, "32V")
    self.assertEqual(utm_point.zone, "32V")
    self.assertEqual(utm_point.longitude_of_origin, 9.0)
    self.assertEqual(utm_point.latitude_of_origin, 60.0)
    self.assertEqual(utm_point.easting, 8583143.0)

  def test_make_utm_point_from_origin(self):
    utm_point = coords.make_utm_point(601021.995134, 4142193.02983,
                                      (37.42104, -123.0), datum="WGS 84")
    self.assertEqual(utm_point.zone, "10S")
    point = coords.utm_to_geodetic(utm_point)
    np.testing.assert_allclose((point.latitude, point.longitude), (LAT, LON),
                               atol=1e-6)

  @parameterized.parameters("10I", "10Z", "XX", "100S")
  def test_make_utm_point_invalid_zone(self, zone):
    with self.assertRaises(errors.InvalidZoneLetterError):
      coords.make_utm_point(601021.995134, 4142193.02983, zone)

  def test_datum_is_kept(self):
    point = coords.make_geodetic_point(LAT, LON, "International")
    utm_point = coords.geodetic_to_utm(point)
    self.assertEqual(utm_point.ellipsoid.name, "International")
    self.assertIsNone(utm_point.epsg)
    new_point = coords.utm_to_geodetic(utm_point)
    self.assertEqual(new_point.ellipsoid.name, "International")
    np.testing.assert_allclose((new_point.latitude, new_point.longitude),
                               (LAT, LON), atol=1e-5)
    wgs84_utm = coords.geodetic_to_utm(coords.make_geodetic_point(LAT, LON))
    self.assertGreater(abs(wgs84_utm.northing - utm_point.northing), 1.0)

  def test_str(self):
    utm_point = coords.make_utm_point(601021.5, 4142193.25, "10S")
    self.assertEqual(str(utm_point),
                     "Northing: 4142193.25, Easting: 601021.5, Zone: 10S")


class LambertTest(parameterized.TestCase):

  def test_geodetic_to_lambert(self):
    point = coords.make_geodetic_point(LAT, LON)
    lambert_point = coords.geodetic_to_lambert(point, NORCAL)
    self.assertEqual(lambert_point.kind, coords.PointKind.LAMBERT)
    np.testing.assert_allclose((lambert_point.easting, lambert_point.northing),
                               (2012532.43263, 212968.846202), atol=1e-4)
    self.assertIsInstance(lambert_point.config, lambert.LambertConfig)

  def test_lambert_to_geodetic(self):
    lambert_point = coords.make_lambert_point(2012532.43263, 212968.846202,
                                              NORCAL)
    point = coords.lambert_to_geodetic(lambert_point)
    np.testing.assert_allclose((point.latitude, point.longitude), (LAT, LON),
                               atol=1e-5)

  @parameterized.parameters(
      (NORCAL,),
      (dict(first_std_parallel=45, second_std_parallel=55,
            latitude_of_origin=50, longitude_of_origin=10,
            false_easting=500_000, false_northing=1_000_000),),
      (dict(first_std_parallel=-10, second_std_parallel=-40,
            latitude_of_origin=-25, longitude_of_origin=135),),
      (dict(first_std_parallel=60, second_std_parallel=20,
            latitude_of_origin=0, longitude_of_origin=-179),),
  )
  def test_round_trip(self, lambert_config):
    for lat, lon in _random_points(100, 7, lat_range=(-60, 80)):
      point = coords.make_geodetic_point(lat, lon)
      new_point = coords.lambert_to_geodetic(
          coords.geodetic_to_lambert(point, lambert_config))
      np.testing.assert_allclose(new_point.latitude, lat, atol=1e-5)
      dlon = (new_point.longitude - lon + 180) % 360 - 180
      np.testing.assert_allclose(dlon, 0.0, atol=1e-5)

  def test_invalid_config(self):
    point = coords.make_geodetic_point(LAT, LON)
    bad = dict(NORCAL, second_std_parallel=33.33333)
    with self.assertRaises(errors.InvalidConfigError):
      coords.geodetic_to_lambert(point, bad)
    with self.assertRaises(errors.InvalidConfigError):
      coords.make_lambert_point(0.0, 0.0, bad)

  def test_datum_is_kept(self):
    point = coords.make_geodetic_point(LAT, LON, "Clarke 1880")
    lambert_point = coords.geodetic_to_lambert(point, NORCAL)
    self.assertEqual(lambert_point.ellipsoid.name, "Clarke 1880")
    new_point = coords.lambert_to_geodetic(lambert_point)
    self.assertEqual(new_point.ellipsoid.name, "Clarke 1880")
    np.testing.assert_allclose((new_point.latitude, new_point.longitude),
                               (LAT, LON), atol=1e-5)

  def test_iterations_from_config(self):
    lambert_point = coords.make_lambert_point(2012532.43263, 212968.846202,
                                              NORCAL)
    one = coords.lambert_to_geodetic(
        lambert_point, config_lib.get_config("lambert_inverse_iterations=1"))
    three = coords.lambert_to_geodetic(lambert_point)
    self.assertGreater(abs(one.latitude - LAT), abs(three.latitude - LAT))

  def test_str(self):
    lambert_point = coords.make_lambert_point(2012532.5, 212968.75, NORCAL)
    self.assertEqual(str(lambert_point),
                     "Northing: 212968.75, Easting: 2012532.5")


class NonFiniteTest(parameterized.TestCase):

  def test_propagate_by_default(self):
    utm_point = coords.make_utm_point(np.nan, 4142193.02983, "10S")
    with self.assertLogs(logger="absl", level="WARNING"):
      point = coords.utm_to_geodetic(utm_point)
    self.assertTrue(np.isnan(point.latitude))

  def test_raise_policy(self):
    config = config_lib.get_config("non_finite=raise")
    utm_point = coords.make_utm_point(np.inf, 4142193.02983, "10S")
    with self.assertRaises(errors.NumericDomainError):
      coords.utm_to_geodetic(utm_point, config=config)
    lambert_point = coords.make_lambert_point(np.nan, 0.0, NORCAL)
    with self.assertRaises(errors.NumericDomainError):
      coords.lambert_to_geodetic(lambert_point, config=config)

  def test_finite_results_pass_raise_policy(self):
    config = config_lib.get_config("non_finite=raise")
    point = coords.make_geodetic_point(LAT, LON)
    coords.geodetic_to_utm(point, config=config)
    coords.geodetic_to_lambert(point, NORCAL, config=config)


if __name__ == "__main__":
  absltest.main()
