"""
parameters.py

Physical and simulation parameters of the path-integral ensemble.

The parameters live in one explicit object owned by the simulation controller and
handed to the sampler and the action evaluator on every regeneration. A
SimulationParameters instance is validated on construction, so an invalid
configuration never exists; single-field updates go through `with_value`.
"""

from __future__ import annotations

import dataclasses
import math
import numbers
from dataclasses import dataclass
from pathlib import Path

import yaml

# ===============================================================
#                   Boundary Conditions and Limits
# ===============================================================

X_START = -2.0
#: float: fixed start position shared by every trajectory.

X_END = 2.0
#: float: fixed end position shared by every trajectory.

MAX_PATH_COUNT = 2000
#: int: upper bound on the number of trajectories in an ensemble (inclusive).

# Fields that must be strictly positive real numbers
POSITIVE_REAL_FIELDS = ("hbar", "mass", "time_step_dt", "spatial_step_dx")
# Fields that must be strictly positive integers
POSITIVE_INTEGER_FIELDS = ("time_steps", "path_count", "lattice_size")
# Boundary positions: any finite real
POSITION_FIELDS = ("x_start", "x_end")


class InvalidParameterError(ValueError):
    """Raised when a simulation parameter is given a value outside its valid range."""

    kind = "InvalidParameter"

    def __init__(self, name, value, reason):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"invalid value {value!r} for {name}: {reason}")


def _is_real(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_integer(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def validate_parameter(name, value):
    """
    Check a single parameter value and return it converted to its canonical type.

    Raises InvalidParameterError for unknown names, wrong types, non-positive values,
    non-finite values and path counts above MAX_PATH_COUNT.
    """
    if name in POSITIVE_REAL_FIELDS:
        if not _is_real(value) or not math.isfinite(value):
            raise InvalidParameterError(name, value, "must be a finite real number")
        if value <= 0:
            raise InvalidParameterError(name, value, "must be strictly positive")
        return float(value)

    if name in POSITIVE_INTEGER_FIELDS:
        if not _is_integer(value):
            raise InvalidParameterError(name, value, "must be an integer")
        if value <= 0:
            raise InvalidParameterError(name, value, "must be strictly positive")
        if name == "path_count" and value > MAX_PATH_COUNT:
            raise InvalidParameterError(name, value, f"must not exceed {MAX_PATH_COUNT}")
        return int(value)

    if name in POSITION_FIELDS:
        if not _is_real(value) or not math.isfinite(value):
            raise InvalidParameterError(name, value, "must be a finite real number")
        return float(value)

    raise InvalidParameterError(name, value, "unknown parameter")


@dataclass(frozen=True)
class SimulationParameters:
    """
    Configuration record for one ensemble generation.

    Attributes:
        hbar: Reduced Planck constant ħ.
        mass: Particle mass.
        time_step_dt: Duration Δt of one time step.
        spatial_step_dx: Spatial unit Δx (informational).
        time_steps: Number of time steps N; trajectories hold N + 1 positions.
        path_count: Number of trajectories per ensemble, at most MAX_PATH_COUNT.
        lattice_size: Lattice size (informational, unused by sampler and action).
        x_start: Fixed start position.
        x_end: Fixed end position.
    """

    hbar: float = 1.0
    mass: float = 1.0
    time_step_dt: float = 0.1
    spatial_step_dx: float = 0.1
    time_steps: int = 50
    path_count: int = 1000
    lattice_size: int = 100
    x_start: float = X_START
    x_end: float = X_END

    def __post_init__(self):
        for field in dataclasses.fields(self):
            checked = validate_parameter(field.name, getattr(self, field.name))
            object.__setattr__(self, field.name, checked)

    def with_value(self, name, value) -> SimulationParameters:
        """Return a validated copy with a single field replaced."""
        checked = validate_parameter(name, value)
        return dataclasses.replace(self, **{name: checked})


EMBEDDED_PARAMETERS = SimulationParameters(path_count=500)
#: SimulationParameters: defaults of the lighter embedded (browser) variant.


def load_parameters(path: str | Path, base: SimulationParameters | None = None) -> SimulationParameters:
    """
    Load simulation parameters from a YAML file.

    Parameters:
        path : str or Path
            YAML file. Keys may sit at top level or under a `simulation:` mapping.
        base : SimulationParameters, optional
            Parameters to start from; keys missing from the file keep their value.
            Defaults to SimulationParameters().

    Returns:
        SimulationParameters: The validated parameters.

    Raises FileNotFoundError for a missing file and InvalidParameterError for a file
    that is not valid YAML or holds unknown keys or invalid values.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise InvalidParameterError("config", str(config_path), f"not valid YAML ({error})") from error

    if not isinstance(raw, dict):
        raise InvalidParameterError("config", raw, "top level must be a mapping")
    values = raw.get("simulation", raw)
    if not isinstance(values, dict):
        raise InvalidParameterError("simulation", values, "must be a mapping")

    parameters = base if base is not None else SimulationParameters()
    known = {field.name for field in dataclasses.fields(SimulationParameters)}
    for name, value in values.items():
        if name not in known:
            raise InvalidParameterError(name, value, "unknown parameter")
        parameters = parameters.with_value(name, value)
    return parameters
