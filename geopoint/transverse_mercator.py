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

"""Transverse Mercator projection on an ellipsoid, vectorized with numpy.

Equations from USGS Bulletin 1532 (Snyder). East longitudes and north
latitudes are positive, all angles in decimal degrees.

These kernels know nothing about UTM zones: the caller picks the longitude of
origin and the false easting, and adds/removes the 10,000,000 m southern
hemisphere offset. See `geopoint.coords` for the UTM conventions.
"""

from geopoint import numerics
import numpy as np

FloatOrArray = numerics.FloatOrArray

K0 = 0.9996  # Scale factor on the central meridian.
UTM_FALSE_EASTING = 500_000.0
SOUTHERN_FALSE_NORTHING = 10_000_000.0


def meridional_arc(lat_rad: FloatOrArray, a: float, e2: float) -> FloatOrArray:
  """Distance along the meridian from the equator to `lat_rad`, in meters."""
  e4 = e2 * e2
  e6 = e4 * e2
  return a * ((1 - e2 / 4 - 3 * e4 / 64 - 5 * e6 / 256) * lat_rad
              - (3 * e2 / 8 + 3 * e4 / 32 + 45 * e6 / 1024)
              * np.sin(2 * lat_rad)
              + (15 * e4 / 256 + 45 * e6 / 1024) * np.sin(4 * lat_rad)
              - (35 * e6 / 3072) * np.sin(6 * lat_rad))


def forward(lat: FloatOrArray, lon: FloatOrArray, lon0: FloatOrArray,
            a: float, e2: float, false_easting: float = 0.0,
            k0: float = K0) -> tuple[FloatOrArray, FloatOrArray]:
  """Projects lat/lon to (easting, northing) in meters.

  Args:
    lat: Latitude in degrees.
    lon: Longitude in degrees.
    lon0: Longitude of origin (central meridian) in degrees.
    a: Semi-major axis of the ellipsoid, in meters.
    e2: Eccentricity squared of the ellipsoid.
    false_easting: Added to the easting.
    k0: Scale factor on the central meridian.

  Returns:
    (easting, northing). Northing is the signed distance from the equator,
    without any southern hemisphere offset.
  """
  with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
    lat_rad = np.radians(lat)
    ep2 = e2 / (1 - e2)
    sin_lat = np.sin(lat_rad)
    cos_lat = np.cos(lat_rad)
    tan_lat = np.tan(lat_rad)

    n = a / np.sqrt(1 - e2 * sin_lat * sin_lat)
    t = tan_lat * tan_lat
    c = ep2 * cos_lat * cos_lat
    dlon = numerics.sanitize_longitude(
        np.asarray(lon, dtype=np.float64) - lon0)
    aa = cos_lat * np.radians(dlon)
    m = meridional_arc(lat_rad, a, e2)

    easting = (k0 * n * (aa + (1 - t + c) * aa**3 / 6
                         + (5 - 18 * t + t * t + 72 * c - 58 * ep2)
                         * aa**5 / 120)
               + false_easting)
    northing = k0 * (m + n * tan_lat * (
        aa**2 / 2 + (5 - t + 9 * c + 4 * c * c) * aa**4 / 24
        + (61 - 58 * t + t * t + 600 * c - 330 * ep2) * aa**6 / 720))
  return easting, northing


def inverse(easting: FloatOrArray, northing: FloatOrArray, lon0: FloatOrArray,
            a: float, e2: float, false_easting: float = 0.0,
            k0: float = K0) -> tuple[FloatOrArray, FloatOrArray]:
  """Unprojects (easting, northing) to (lat, lon) in degrees.

  `northing` must be the signed distance from the equator (any southern
  hemisphere offset already removed). Returned longitudes are not wrapped.
  """
  with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
    ep2 = e2 / (1 - e2)
    sqrt_1_e2 = np.sqrt(1 - e2)
    e1 = (1 - sqrt_1_e2) / (1 + sqrt_1_e2)
    x = np.asarray(easting, dtype=np.float64) - false_easting
    m = np.asarray(northing, dtype=np.float64) / k0

    # Footpoint latitude.
    mu = m / (a * (1 - e2 / 4 - 3 * e2 * e2 / 64 - 5 * e2**3 / 256))
    phi1 = (mu + (3 * e1 / 2 - 27 * e1**3 / 32) * np.sin(2 * mu)
            + (21 * e1 * e1 / 16 - 55 * e1**4 / 32) * np.sin(4 * mu)
            + (151 * e1**3 / 96) * np.sin(6 * mu))

    sin_phi1 = np.sin(phi1)
    cos_phi1 = np.cos(phi1)
    tan_phi1 = np.tan(phi1)
    n1 = a / np.sqrt(1 - e2 * sin_phi1 * sin_phi1)
    t1 = tan_phi1 * tan_phi1
    c1 = ep2 * cos_phi1 * cos_phi1
    r1 = a * (1 - e2) / (1 - e2 * sin_phi1 * sin_phi1)**1.5
    d = x / (n1 * k0)

    lat_rad = phi1 - (n1 * tan_phi1 / r1) * (
        d**2 / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 * c1 - 9 * ep2) * d**4 / 24
        + (61 + 90 * t1 + 298 * c1 + 45 * t1 * t1 - 252 * ep2 - 3 * c1 * c1)
        * d**6 / 720)
    dlon_rad = (d - (1 + 2 * t1 + c1) * d**3 / 6
                + (5 - 2 * c1 + 28 * t1 - 3 * c1 * c1 + 8 * ep2 + 24 * t1 * t1)
                * d**5 / 120) / cos_phi1
  return np.degrees(lat_rad), lon0 + np.degrees(dlon_rad)
