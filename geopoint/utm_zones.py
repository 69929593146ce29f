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

"""UTM zone numbers and latitude band letters.

Zones are 6 degrees of longitude wide, numbered 1..60 eastwards from -180.
Latitude bands are 8 degrees high, lettered C..X (I and O skipped) from -80
northwards; X is 12 degrees high and closed at 84. Two areas deviate from the
regular grid: southwestern Norway (zone 32 widened) and Svalbard (zones 31,
33, 35, 37 widened, 32, 34, 36 unused).
"""

import math
import re

from geopoint import errors
from geopoint import numerics

BAND_LETTERS = "CDEFGHJKLMNPQRSTUVWX"
INVALID_LETTER = "Z"  # Latitude outside the UTM limits of 80S to 84N.
MIN_LATITUDE = -80.0
MAX_LATITUDE = 84.0

_SVALBARD_ZONES = ((0.0, 9.0, 31), (9.0, 21.0, 33), (21.0, 33.0, 35),
                   (33.0, 42.0, 37))
_ZONE_RE = re.compile(r"^\s*(\d{1,2})\s*([A-Za-z])\s*$")


def is_norway(lat: float, lon: float) -> bool:
  return 56.0 <= lat < 64.0 and 3.0 <= lon < 12.0


def is_svalbard(lat: float) -> bool:
  return 72.0 <= lat < 84.0


def svalbard_zone(lon: float) -> int:
  for west, east, zone in _SVALBARD_ZONES:
    if west <= lon < east:
      return zone
  raise errors.UndefinedZoneError(
      f"No UTM zone defined in the Svalbard latitude band for longitude {lon}"
      " (only [0, 42) is covered).")


def zone_number(lat: float, lon: float) -> int:
  """Returns the UTM zone number, honouring the Norway/Svalbard exceptions.

  Args:
    lat: Latitude in degrees.
    lon: Longitude in degrees, any range (it is wrapped to [-180, 180)).

  Returns:
    Zone number in 1..60.

  Raises:
    UndefinedZoneError: 72 <= lat < 84 with longitude outside [0, 42).
  """
  lon = float(numerics.sanitize_longitude(lon))
  if is_svalbard(lat):
    return svalbard_zone(lon)
  if is_norway(lat, lon):
    return 32
  return math.floor((lon + 180.0) / 6.0) + 1


def letter_designator(lat: float) -> str:
  """Returns the latitude band letter, or "Z" outside [-80, 84]."""
  if not MIN_LATITUDE <= lat <= MAX_LATITUDE:  # Also catches NaN.
    return INVALID_LETTER
  # Band X is closed at 84, so clip the index into it.
  return BAND_LETTERS[min(int((lat - MIN_LATITUDE) // 8), 19)]


def longitude_of_origin(zone: int) -> float:
  """Central meridian of the zone (+3 puts the origin mid-zone)."""
  return float((zone - 1) * 6 - 180 + 3)


def letter_to_latitude(letter: str) -> float:
  """Returns the mid-band latitude of a band letter.

  Only used to fill in the latitude of origin of points built from a zone
  designator, the projection math never reads it.

  Args:
    letter: Band letter C..X, case-insensitive.

  Returns:
    Latitude in the middle of the band, e.g. 36 for "S", 78 for "X".

  Raises:
    InvalidZoneLetterError: not a band letter.
  """
  upper = letter.upper()
  if len(upper) != 1 or upper not in BAND_LETTERS:
    raise errors.InvalidZoneLetterError(
        f"{letter!r} is not a valid UTM zone letter.")
  if upper == "X":
    return (72 + 84) / 2
  south = MIN_LATITUDE + 8 * BAND_LETTERS.index(upper)
  return south + 4.0


def is_southern(letter: str) -> bool:
  return letter.upper() < "N"


def parse_zone(zone: str) -> tuple[int, str]:
  """Splits a zone designator like "10S" into (10, "S").

  Raises:
    InvalidZoneLetterError: malformed designator, zone number outside 1..60
      or unknown band letter.
  """
  match = _ZONE_RE.match(zone) if isinstance(zone, str) else None
  if match is None:
    raise errors.InvalidZoneLetterError(
        f"{zone!r} is not a UTM zone designator like '10S'.")
  number, letter = int(match.group(1)), match.group(2).upper()
  if not 1 <= number <= 60:
    raise errors.InvalidZoneLetterError(
        f"UTM zone number must be in 1..60, got {number} in {zone!r}.")
  if letter not in BAND_LETTERS:
    raise errors.InvalidZoneLetterError(
        f"{letter!r} is not a valid UTM zone letter in {zone!r}.")
  return number, letter


def zone_string(lat: float, lon: float) -> str:
  return f"{zone_number(lat, lon)}{letter_designator(lat)}"
