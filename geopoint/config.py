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

"""Library configuration.

All conversions take an optional `config` argument. When it is omitted the
frozen `DEFAULT_CONFIG` is used. A config can be built from a single string
argument, the same way experiment configs are passed on the command line:

  config = config.get_config("non_finite=raise,lambert_inverse_iterations=5")
"""

from geopoint import ellipsoids
from geopoint import errors
import ml_collections as mlc
from ml_collections import config_dict as cd

NON_FINITE_POLICIES = ("propagate", "raise")


def get_config(arg: str | None = None) -> mlc.ConfigDict:
  """Returns the library config, optionally overridden by `arg`."""
  arg = parse_arg(
      arg,
      default_datum=ellipsoids.DEFAULT_DATUM,
      # What to do with NaN/Inf projection results (poles, degenerate cones).
      non_finite="propagate",
      # Fixed number of conformal latitude corrections in the Lambert inverse.
      lambert_inverse_iterations=3,
  )
  config = cd.ConfigDict()
  config.default_datum = arg.default_datum
  config.non_finite = arg.non_finite
  config.lambert_inverse_iterations = arg.lambert_inverse_iterations
  validate(config)
  return config


def validate(config: mlc.ConfigDict) -> None:
  if config.default_datum not in ellipsoids.ELLIPSOIDS:
    raise errors.UnknownDatumError(
        f"Unknown default_datum {config.default_datum!r}, expected one of "
        f"{ellipsoids.names()}.")
  if config.non_finite not in NON_FINITE_POLICIES:
    raise ValueError(f"Unknown non_finite policy {config.non_finite!r}, "
                     f"expected one of {NON_FINITE_POLICIES}.")
  if config.lambert_inverse_iterations < 1:
    raise ValueError("lambert_inverse_iterations must be >= 1, got "
                     f"{config.lambert_inverse_iterations}.")


def resolve(config: mlc.ConfigDict | None) -> mlc.ConfigDict:
  return DEFAULT_CONFIG if config is None else config


def parse_arg(arg: str | None, **spec) -> mlc.ConfigDict:
  """Parses a "key=value,key2=value2" string against `spec` defaults.

  When the string holds a single value without "=", it is the value of the
  first spec entry. Values are converted with the type of their default.

  Args:
    arg: the string argument, may be None or empty.
    **spec: the names and default values of the expected options.

  Returns:
    ConfigDict with the type-converted values.
  """
  arg = arg or ""
  result = mlc.ConfigDict(type_safe=False)

  if arg and "," not in arg and "=" not in arg:
    arg = f"{list(spec)[0]}={arg}"

  raw_kv = {}
  for raw_arg in arg.split(","):
    if raw_arg:
      key, sep, value = raw_arg.partition("=")
      if not sep:
        raise ValueError(f"Expected key=value, got {raw_arg!r}.")
      raw_kv[key.strip()] = value.strip()

  for name, default in spec.items():
    val = raw_kv.pop(name, None)
    result[name] = type(default)(val) if val is not None else default

  if raw_kv:
    raise ValueError(f"Unhandled config args remain: {raw_kv}")
  return result


DEFAULT_CONFIG = cd.FrozenConfigDict(get_config())
