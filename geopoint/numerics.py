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

"""Numeric helpers shared by the projections."""

from absl import logging
from geopoint import errors
import numpy as np

FloatOrArray = float | np.ndarray


def sanitize_longitude(lon: FloatOrArray) -> FloatOrArray:
  """Wraps longitude into [-180, 180); 180 maps to -180."""
  wrapped = np.mod(np.asarray(lon, dtype=np.float64) + 180.0, 360.0) - 180.0
  # The mod rounds up to 360 for tiny negative inputs just below -180.
  return np.where(wrapped >= 180.0, wrapped - 360.0, wrapped)[()]


def check_finite(what: str, *values: FloatOrArray,
                 policy: str = "propagate") -> None:
  """Applies the non-finite policy to projection results.

  Args:
    what: Name of the operation, for messages.
    *values: Results to check.
    policy: "propagate" logs a warning and lets NaN/Inf through, "raise"
      raises NumericDomainError.

  Raises:
    NumericDomainError: a value is NaN/Inf and policy is "raise".
  """
  if all(np.all(np.isfinite(v)) for v in values):
    return
  msg = f"{what} produced non-finite values: {values}"
  if policy == "raise":
    raise errors.NumericDomainError(msg)
  logging.warning(msg)
