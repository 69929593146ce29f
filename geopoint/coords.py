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

"""Working with coordinates.

A point is one of three immutable variants, tagged by `PointKind`:

  GeodeticPoint  latitude/longitude on a reference ellipsoid,
  UtmPoint       Transverse Mercator easting/northing (UTM or Local TM),
  LambertPoint   Lambert Conformal Conic easting/northing.

Conversions are plain functions between the variants:

  home = make_geodetic_point(37.42104, -121.85831)
  utm = geodetic_to_utm(home)  # 601021.995 E, 4142193.030 N, zone 10S.
  local = geodetic_to_utm(home, longitude_of_origin=-122)  # Local TM.
  back = utm_to_geodetic(local, longitude_of_origin=-122)

Local Transverse Mercator uses the UTM formulas with a caller-chosen central
meridian instead of the zone one, with no false easting (points west of the
origin get negative eastings) and no southern hemisphere false northing. It
is handy for maps that straddle UTM zones, like state grids.
"""

from collections.abc import Mapping, Sequence
import dataclasses
import enum
from typing import Any

from absl import logging
from geopoint import config as config_lib
from geopoint import ellipsoids
from geopoint import errors
from geopoint import lambert
from geopoint import numerics
from geopoint import transverse_mercator as tm
from geopoint import utm_zones
import ml_collections as mlc

ConfigT = mlc.ConfigDict | None


class PointKind(enum.Enum):
  GEODETIC = "geodetic"
  UTM = "utm"
  LAMBERT = "lambert"


@dataclasses.dataclass(frozen=True)
class GeodeticPoint:
  """Latitude/longitude on a reference ellipsoid.

  Attributes:
    latitude: Degrees, north positive, within [-90, 90].
    longitude: Degrees, east positive, wrapped to [-180, 180) on construction.
    ellipsoid: Reference ellipsoid.
  """
  latitude: float
  longitude: float
  ellipsoid: ellipsoids.Ellipsoid = ellipsoids.WGS84

  def __post_init__(self):
    latitude = float(self.latitude)
    if abs(latitude) > 90.0:
      raise errors.InvalidLatitudeError(
          f"Latitude must be within [-90, 90], got {latitude}.")
    object.__setattr__(self, "latitude", latitude)
    object.__setattr__(self, "longitude",
                       float(numerics.sanitize_longitude(self.longitude)))

  @property
  def kind(self) -> PointKind:
    return PointKind.GEODETIC

  def __str__(self) -> str:
    return f"Latitude: {self.latitude}, Longitude: {self.longitude}"


@dataclasses.dataclass(frozen=True)
class UtmPoint:
  """Transverse Mercator coordinates.

  Build it with `from_zone` (origin derived from a zone designator) or with
  `from_origin` (zone derived from the origin), never with both.

  Attributes:
    easting: Meters. Includes the 500,000 m false easting for UTM, may be
      negative for Local TM.
    northing: Meters. Includes the 10,000,000 m false northing for UTM zones
      in the southern hemisphere.
    zone_number: UTM zone number 1..60, None when no zone is defined.
    zone_letter: Latitude band letter, "Z" outside the UTM limits, "" when no
      zone is defined.
    longitude_of_origin: Central meridian, degrees.
    latitude_of_origin: Degrees. Mid-band latitude for points built from a
      zone designator (bookkeeping only, not used by the projection).
    ellipsoid: Reference ellipsoid.
  """
  easting: float
  northing: float
  zone_number: int | None
  zone_letter: str
  longitude_of_origin: float
  latitude_of_origin: float
  ellipsoid: ellipsoids.Ellipsoid = ellipsoids.WGS84

  @classmethod
  def from_zone(cls, easting: float, northing: float, zone: str,
                ellipsoid: ellipsoids.Ellipsoid = ellipsoids.WGS84
                ) -> "UtmPoint":
    """Point in a UTM zone given as designator, e.g. "10S"."""
    zone_number, zone_letter = utm_zones.parse_zone(zone)
    return cls(float(easting), float(northing), zone_number, zone_letter,
               utm_zones.longitude_of_origin(zone_number),
               utm_zones.letter_to_latitude(zone_letter), ellipsoid)

  @classmethod
  def from_origin(cls, easting: float, northing: float,
                  latitude_of_origin: float, longitude_of_origin: float,
                  ellipsoid: ellipsoids.Ellipsoid = ellipsoids.WGS84,
                  strict: bool = True) -> "UtmPoint":
    """Point relative to an explicit origin, the zone is derived from it.

    Args:
      easting: Easting in meters.
      northing: Northing in meters.
      latitude_of_origin: Degrees.
      longitude_of_origin: Degrees.
      ellipsoid: Reference ellipsoid.
      strict: If False, an origin without a defined UTM zone gives an empty
        zone instead of raising.

    Returns:
      A UtmPoint.

    Raises:
      UndefinedZoneError: strict and no UTM zone is defined at the origin.
    """
    try:
      zone_number = utm_zones.zone_number(latitude_of_origin,
                                          longitude_of_origin)
      zone_letter = utm_zones.letter_designator(latitude_of_origin)
    except errors.UndefinedZoneError:
      if strict:
        raise
      logging.warning("No UTM zone defined at origin (%s, %s), leaving the "
                      "zone label empty.", latitude_of_origin,
                      longitude_of_origin)
      zone_number, zone_letter = None, ""
    return cls(float(easting), float(northing), zone_number, zone_letter,
               float(longitude_of_origin), float(latitude_of_origin),
               ellipsoid)

  @property
  def kind(self) -> PointKind:
    return PointKind.UTM

  @property
  def zone(self) -> str:
    if self.zone_number is None:
      return ""
    return f"{self.zone_number}{self.zone_letter}"

  @property
  def is_southern(self) -> bool:
    if self.zone_letter in ("", utm_zones.INVALID_LETTER):
      # No band letter, fall back to the origin (polar caps, no zone).
      return self.latitude_of_origin < 0
    return utm_zones.is_southern(self.zone_letter)

  @property
  def epsg(self) -> str | None:
    """EPSG code of the WGS 84 UTM zone, None for other ellipsoids/zones."""
    if (self.ellipsoid.name != "WGS 84" or self.zone_number is None
        or self.zone_letter == utm_zones.INVALID_LETTER):
      return None
    return f"EPSG:32{7 if self.is_southern else 6}{self.zone_number:02}"

  def __str__(self) -> str:
    return (f"Northing: {self.northing}, Easting: {self.easting}, "
            f"Zone: {self.zone}")


@dataclasses.dataclass(frozen=True)
class LambertPoint:
  """Lambert Conformal Conic coordinates.

  Attributes:
    easting: Meters, relative to the false easting of `config`.
    northing: Meters, relative to the false northing of `config`.
    config: Projection parameters the point was projected with.
    ellipsoid: Reference ellipsoid.
  """
  easting: float
  northing: float
  config: lambert.LambertConfig
  ellipsoid: ellipsoids.Ellipsoid = ellipsoids.WGS84

  @property
  def kind(self) -> PointKind:
    return PointKind.LAMBERT

  def __str__(self) -> str:
    return f"Northing: {self.northing}, Easting: {self.easting}"


Point = GeodeticPoint | UtmPoint | LambertPoint


def make_geodetic_point(latitude: float, longitude: float,
                        datum: str | None = None,
                        config: ConfigT = None) -> GeodeticPoint:
  """Returns a geodetic point on the named datum (default WGS 84).

  Raises:
    UnknownDatumError: unknown datum.
    InvalidLatitudeError: latitude outside [-90, 90].
  """
  return GeodeticPoint(latitude, longitude, ellipsoids.lookup(datum, config))


def make_utm_point(easting: float, northing: float,
                   zone_or_origin: str | Sequence[float],
                   datum: str | None = None,
                   config: ConfigT = None) -> UtmPoint:
  """Returns a UTM point from a zone designator or an explicit origin.

  Args:
    easting: Easting in meters.
    northing: Northing in meters.
    zone_or_origin: Zone designator like "10S", or a
      (latitude_of_origin, longitude_of_origin) pair in degrees.
    datum: Ellipsoid name, default WGS 84.
    config: Optional library config.

  Returns:
    A UtmPoint.

  Raises:
    InvalidZoneLetterError: unparseable zone designator.
    UnknownDatumError: unknown datum.
  """
  ellipsoid = ellipsoids.lookup(datum, config)
  if isinstance(zone_or_origin, str):
    return UtmPoint.from_zone(easting, northing, zone_or_origin, ellipsoid)
  latitude_of_origin, longitude_of_origin = zone_or_origin
  return UtmPoint.from_origin(easting, northing, latitude_of_origin,
                              longitude_of_origin, ellipsoid)


def make_lambert_point(easting: float, northing: float,
                       lambert_config: lambert.LambertConfig | Mapping[str, Any],
                       datum: str | None = None,
                       config: ConfigT = None) -> LambertPoint:
  """Returns a Lambert point; raises InvalidConfigError for a bad config."""
  return LambertPoint(float(easting), float(northing),
                      lambert.LambertConfig.from_dict(lambert_config),
                      ellipsoids.lookup(datum, config))


def geodetic_to_utm(point: GeodeticPoint,
                    longitude_of_origin: float | None = None,
                    config: ConfigT = None) -> UtmPoint:
  """Projects a geodetic point to UTM, or to Local TM given an origin.

  Without `longitude_of_origin` the zone central meridian, the 500,000 m
  false easting and, south of the equator, the 10,000,000 m false northing
  are used. With it, the given meridian is the origin and no false
  easting/northing is applied.

  Args:
    point: Point to project.
    longitude_of_origin: Central meridian for Local TM, in degrees.
    config: Optional library config.

  Returns:
    UtmPoint carrying the origin used, so it can be inverted.

  Raises:
    UndefinedZoneError: UTM mode in the Svalbard band outside [0, 42).
    NumericDomainError: non-finite result and config.non_finite == "raise".
  """
  config = config_lib.resolve(config)
  ellipsoid = point.ellipsoid
  local = longitude_of_origin is not None
  if local:
    false_easting = 0.0
  else:
    zone_number = utm_zones.zone_number(point.latitude, point.longitude)
    zone_letter = utm_zones.letter_designator(point.latitude)
    longitude_of_origin = utm_zones.longitude_of_origin(zone_number)
    false_easting = tm.UTM_FALSE_EASTING
    if zone_letter == utm_zones.INVALID_LETTER:
      logging.warning("Latitude %s is outside the UTM limits [%s, %s].",
                      point.latitude, utm_zones.MIN_LATITUDE,
                      utm_zones.MAX_LATITUDE)

  easting, northing = tm.forward(point.latitude, point.longitude,
                                 longitude_of_origin, ellipsoid.a,
                                 ellipsoid.e2, false_easting)
  if not local and point.latitude < 0:
    northing += tm.SOUTHERN_FALSE_NORTHING
  numerics.check_finite("Transverse Mercator forward", easting, northing,
                        policy=config.non_finite)
  if local:
    # Zone label re-derived from the origin, it is informative only.
    return UtmPoint.from_origin(easting, northing, point.latitude,
                                longitude_of_origin, ellipsoid, strict=False)
  return UtmPoint(float(easting), float(northing), zone_number, zone_letter,
                  longitude_of_origin, point.latitude, ellipsoid)


def utm_to_geodetic(point: UtmPoint,
                    longitude_of_origin: float | None = None,
                    config: ConfigT = None) -> GeodeticPoint:
  """Unprojects a UTM point, or a Local TM point given its origin.

  Local TM northings carry no hemisphere information: positive northings
  always come back north of the equator.

  Args:
    point: Point to unproject.
    longitude_of_origin: Central meridian the Local TM point was projected
      with, in degrees. None for UTM.
    config: Optional library config.

  Returns:
    GeodeticPoint on the point's ellipsoid.

  Raises:
    NumericDomainError: non-finite result and config.non_finite == "raise".
  """
  config = config_lib.resolve(config)
  ellipsoid = point.ellipsoid
  northing = point.northing
  if longitude_of_origin is None:
    if point.is_southern:
      northing -= tm.SOUTHERN_FALSE_NORTHING
    longitude_of_origin = point.longitude_of_origin
    false_easting = tm.UTM_FALSE_EASTING
  else:
    false_easting = 0.0

  lat, lon = tm.inverse(point.easting, northing, longitude_of_origin,
                        ellipsoid.a, ellipsoid.e2, false_easting)
  numerics.check_finite("Transverse Mercator inverse", lat, lon,
                        policy=config.non_finite)
  return GeodeticPoint(float(lat), float(lon), ellipsoid)


def geodetic_to_lambert(
    point: GeodeticPoint,
    lambert_config: lambert.LambertConfig | Mapping[str, Any],
    config: ConfigT = None) -> LambertPoint:
  """Projects a geodetic point to Lambert Conformal Conic.

  Args:
    point: Point to project.
    lambert_config: Projection parameters, a LambertConfig or a mapping
      (e.g. ConfigDict) with its fields.
    config: Optional library config.

  Returns:
    LambertPoint carrying the projection parameters.

  Raises:
    InvalidConfigError: `lambert_config` fails validation.
    NumericDomainError: non-finite result and config.non_finite == "raise".
  """
  config = config_lib.resolve(config)
  lambert_config = lambert.LambertConfig.from_dict(lambert_config)
  easting, northing = lambert.forward(point.latitude, point.longitude,
                                      lambert_config, point.ellipsoid)
  numerics.check_finite("Lambert forward", easting, northing,
                        policy=config.non_finite)
  return LambertPoint(float(easting), float(northing), lambert_config,
                      point.ellipsoid)


def lambert_to_geodetic(point: LambertPoint,
                        config: ConfigT = None) -> GeodeticPoint:
  """Unprojects a Lambert point with the parameters it carries."""
  config = config_lib.resolve(config)
  lat, lon = lambert.inverse(point.easting, point.northing, point.config,
                             point.ellipsoid,
                             iterations=config.lambert_inverse_iterations)
  numerics.check_finite("Lambert inverse", lat, lon, policy=config.non_finite)
  return GeodeticPoint(float(lat), float(lon), point.ellipsoid)
