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

"""Reference ellipsoids.

Values from Peter H. Dana's datum notes, after the Defense Mapping Agency
1987b supplement to the WGS 84 technical report (DMA TR 8350.2).
"""

import dataclasses
import math
import types

from geopoint import errors


@dataclasses.dataclass(frozen=True)
class Ellipsoid:
  """Reference ellipsoid.

  Attributes:
    name: Name of the ellipsoid, key in `ELLIPSOIDS`.
    a: Semi-major axis (equatorial radius), in meters.
    e2: First eccentricity squared.
  """
  name: str
  a: float  # Semi-major axis, in meters.
  e2: float  # Eccentricity squared.

  def __post_init__(self):
    if not self.a > 0:
      raise ValueError(f"Semi-major axis must be positive, got {self.a}.")
    if not 0 <= self.e2 < 1:
      raise ValueError(f"Eccentricity squared must be in [0, 1), got {self.e2}.")

  @property
  def eccentricity(self) -> float:
    return math.sqrt(self.e2)

  @property
  def ecc_prime_squared(self) -> float:
    """Second eccentricity squared."""
    return self.e2 / (1 - self.e2)


_TABLE = (
    # Name, equatorial radius (m), eccentricity squared.
    ("Airy", 6377563, 0.00667054),
    ("Australian National", 6378160, 0.006694542),
    ("Bessel 1841", 6377397, 0.006674372),
    ("Bessel 1841 Nambia", 6377484, 0.006674372),
    ("Clarke 1866", 6378206, 0.006768658),
    ("Clarke 1880", 6378249, 0.006803511),
    ("Everest", 6377276, 0.006637847),
    ("Fischer 1960 Mercury", 6378166, 0.006693422),
    ("Fischer 1968", 6378150, 0.006693422),
    ("GRS 1967", 6378160, 0.006694605),
    ("GRS 1980", 6378137, 0.00669438),
    ("Helmert 1906", 6378200, 0.006693422),
    ("Hough", 6378270, 0.00672267),
    ("International", 6378388, 0.00672267),
    ("Krassovsky", 6378245, 0.006693422),
    ("Modified Airy", 6377340, 0.00667054),
    ("Modified Everest", 6377304, 0.006637847),
    ("Modified Fischer 1960", 6378155, 0.006693422),
    ("South American 1969", 6378160, 0.006694542),
    ("WGS 60", 6378165, 0.006693422),
    ("WGS 66", 6378145, 0.006694542),
    ("WGS 72", 6378135, 0.006694318),
    ("WGS 84", 6378137, 0.00669438),
)

# Read-only view, safe to share between threads.
ELLIPSOIDS = types.MappingProxyType(
    {name: Ellipsoid(name, float(a), e2) for name, a, e2 in _TABLE})

DEFAULT_DATUM = "WGS 84"
WGS84 = ELLIPSOIDS[DEFAULT_DATUM]


def names() -> list[str]:
  return list(ELLIPSOIDS)


def lookup(name: str | None = None, config=None) -> Ellipsoid:
  """Returns the ellipsoid registered under `name`.

  Args:
    name: Ellipsoid name, e.g. "WGS 84" or "Clarke 1866". Empty or None
      selects `config.default_datum`, or WGS 84 without a config.
    config: Optional library config, see `geopoint.config`.

  Returns:
    The registered Ellipsoid.

  Raises:
    UnknownDatumError: `name` is not registered.
  """
  if not name:
    name = DEFAULT_DATUM if config is None else config.default_datum
  try:
    return ELLIPSOIDS[name]
  except KeyError:
    raise errors.UnknownDatumError(
        f"Unknown datum {name!r}, expected one of {names()}.") from None
