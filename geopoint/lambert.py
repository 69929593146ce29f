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

"""Lambert Conformal Conic projection with two standard parallels.

Formulas from EPSG Guidance Note 7-2 (Lambert Conic Conformal 2SP) and
Snyder, Map Projections - A Working Manual (USGS Professional Paper 1395).
Useful for large mid-latitude areas (e.g. the whole USA or Europe), not near
the poles.
"""

from collections.abc import Mapping
import dataclasses
import functools
import math
from typing import Any, NamedTuple

from absl import logging
from geopoint import ellipsoids
from geopoint import errors
from geopoint import numerics
import numpy as np

FloatOrArray = numerics.FloatOrArray

INVERSE_ITERATIONS = 3


@dataclasses.dataclass(frozen=True)
class LambertConfig:
  """Lambert Conformal Conic projection parameters.

  Attributes:
    first_std_parallel: First latitude where the cone cuts the ellipsoid.
    second_std_parallel: Second latitude where the cone cuts the ellipsoid.
    latitude_of_origin: "Center" latitude of the projected area.
    longitude_of_origin: "Center" longitude of the projected area.
    false_easting: Offset in meters added to eastings.
    false_northing: Offset in meters added to northings.
  """
  first_std_parallel: float
  second_std_parallel: float
  latitude_of_origin: float
  longitude_of_origin: float
  false_easting: float = 0.0
  false_northing: float = 0.0

  def __post_init__(self):
    for field in dataclasses.fields(self):
      value = getattr(self, field.name)
      try:
        value = float(value)
      except (TypeError, ValueError):
        raise errors.InvalidConfigError(
            f"{field.name} must be a number, got {value!r}.") from None
      if not math.isfinite(value):
        raise errors.InvalidConfigError(
            f"{field.name} must be finite, got {value}.")
      object.__setattr__(self, field.name, value)

    phi1, phi2 = self.first_std_parallel, self.second_std_parallel
    for name, phi in (("first_std_parallel", phi1),
                      ("second_std_parallel", phi2)):
      if not -90.0 < phi < 90.0:
        raise errors.InvalidConfigError(
            f"{name} must be strictly between -90 and 90, got {phi}.")
    if phi1 == phi2:
      raise errors.InvalidConfigError(
          f"Standard parallels must differ, both are {phi1}.")
    if phi1 == -phi2:
      # The cone degenerates into a cylinder (n = 0).
      raise errors.InvalidConfigError(
          f"Standard parallels {phi1} and {phi2} are symmetric about the "
          "equator.")
    if not -90.0 <= self.latitude_of_origin <= 90.0:
      raise errors.InvalidConfigError(
          "latitude_of_origin must be within [-90, 90], got "
          f"{self.latitude_of_origin}.")

  @classmethod
  def from_dict(cls, d: Mapping[str, Any]) -> "LambertConfig":
    """Builds a config from a mapping or a ConfigDict."""
    if isinstance(d, cls):
      return d
    try:
      return cls(**dict(d))
    except TypeError as e:
      raise errors.InvalidConfigError(f"Bad Lambert config {d!r}: {e}") from e


class ConeConstants(NamedTuple):
  n: float  # Cone constant (sine of the cone apex half-angle).
  f: float  # Scale constant F.
  rho0: float  # Radius of the parallel of origin, in meters.


def _m(phi: FloatOrArray, e2: float) -> FloatOrArray:
  sin_phi = np.sin(phi)
  return np.cos(phi) / np.sqrt(1 - e2 * sin_phi * sin_phi)


def _t(phi: FloatOrArray, e: float) -> FloatOrArray:
  e_sin = e * np.sin(phi)
  return np.tan(np.pi / 4 - phi / 2) / ((1 - e_sin) / (1 + e_sin))**(e / 2)


@functools.lru_cache(maxsize=64)
def cone_constants(config: LambertConfig,
                   ellipsoid: ellipsoids.Ellipsoid) -> ConeConstants:
  """Derives n, F and rho0 for the configuration on the ellipsoid."""
  a, e2, e = ellipsoid.a, ellipsoid.e2, ellipsoid.eccentricity
  phi1 = math.radians(config.first_std_parallel)
  phi2 = math.radians(config.second_std_parallel)
  phi0 = math.radians(config.latitude_of_origin)
  m1, m2 = _m(phi1, e2), _m(phi2, e2)
  t1, t2, t0 = _t(phi1, e), _t(phi2, e), _t(phi0, e)
  n = (math.log(m1) - math.log(m2)) / (math.log(t1) - math.log(t2))
  f = m1 / (n * t1**n)
  with np.errstate(divide="ignore", over="ignore"):
    rho0 = a * f * np.power(t0, n)
  constants = ConeConstants(float(n), float(f), float(rho0))
  logging.debug("Lambert cone constants for %s on %s: %s",
                config, ellipsoid.name, constants)
  return constants


def forward(lat: FloatOrArray, lon: FloatOrArray, config: LambertConfig,
            ellipsoid: ellipsoids.Ellipsoid
            ) -> tuple[FloatOrArray, FloatOrArray]:
  """Projects lat/lon (degrees) to Lambert (easting, northing) in meters.

  The longitude difference to the origin is wrapped to [-180, 180), so the
  cut of the cone is on the meridian opposite to the origin.
  """
  n, f, rho0 = cone_constants(config, ellipsoid)
  with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
    t = _t(np.radians(lat), ellipsoid.eccentricity)
    rho = ellipsoid.a * f * np.power(t, n)
    dlon = numerics.sanitize_longitude(
        np.asarray(lon, dtype=np.float64) - config.longitude_of_origin)
    theta = n * np.radians(dlon)
    easting = config.false_easting + rho * np.sin(theta)
    northing = config.false_northing + rho0 - rho * np.cos(theta)
  return easting, northing


def inverse(easting: FloatOrArray, northing: FloatOrArray,
            config: LambertConfig, ellipsoid: ellipsoids.Ellipsoid,
            iterations: int = INVERSE_ITERATIONS
            ) -> tuple[FloatOrArray, FloatOrArray]:
  """Unprojects Lambert (easting, northing) to (lat, lon) in degrees.

  Latitude is refined by a fixed number of conformal latitude corrections
  after the spherical first guess, not iterated to convergence. With three
  corrections the residual is below 1e-7 degrees for terrestrial
  eccentricities.

  Args:
    easting: Easting in meters.
    northing: Northing in meters.
    config: Projection parameters.
    ellipsoid: Ellipsoid the coordinates were projected on.
    iterations: Number of latitude corrections.

  Returns:
    (lat, lon) in degrees. Longitudes are not wrapped.
  """
  n, f, rho0 = cone_constants(config, ellipsoid)
  e = ellipsoid.eccentricity
  sign = 1.0 if n > 0 else -1.0
  with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
    x = np.asarray(easting, dtype=np.float64) - config.false_easting
    y = rho0 - (np.asarray(northing, dtype=np.float64) - config.false_northing)
    rho = sign * np.hypot(x, y)
    theta = np.arctan2(sign * x, sign * y)
    t = np.power(rho / (ellipsoid.a * f), 1 / n)

    lon_rad = theta / n + math.radians(config.longitude_of_origin)
    phi = np.pi / 2 - 2 * np.arctan(t)
    for _ in range(iterations):
      e_sin = e * np.sin(phi)
      phi = np.pi / 2 - 2 * np.arctan(t * ((1 - e_sin) / (1 + e_sin))**(e / 2))
  return np.degrees(phi), np.degrees(lon_rad)
