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

"""Errors raised when building points or configurations."""


class GeoPointError(ValueError):
  """Base class for all geopoint input errors."""


class UnknownDatumError(GeoPointError):
  """The ellipsoid name is not in the registry."""


class InvalidConfigError(GeoPointError):
  """A Lambert configuration failed validation."""


class InvalidZoneLetterError(GeoPointError):
  """A UTM zone designator (e.g. "10S") could not be parsed."""


class UndefinedZoneError(GeoPointError):
  """No UTM zone is defined for the location (Svalbard band, lon not in [0, 42))."""


class InvalidLatitudeError(GeoPointError):
  """Latitude outside [-90, 90]."""


class NumericDomainError(GeoPointError):
  """A projection produced NaN/Inf and the policy asks to raise."""
