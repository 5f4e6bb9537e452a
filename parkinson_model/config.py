"""Configuration for building and running a simulation."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Tuple

from .errors import ValidationError


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(slots=True)
class SimulationConfig:
    """Model constants, initial population sizes and scheduler cadence.

    The defaults reproduce the reference parameterisation of the disease model:
    a 50 x 50 x 50 space holding 100 neurons, 10 astrocytes and 10 microglia.
    ``lewy_body_degeneration_threshold`` and ``base_degeneration_probability``
    are carried for completeness; no transition rule reads them.
    """

    dimension_x: float = 50
    dimension_y: float = 50
    dimension_z: float = 50
    mito_transfer_threshold: float = 30.0
    lewy_body_degeneration_threshold: int = 5
    base_degeneration_probability: float = 0.01
    mitochondria_per_neuron: int = 5
    initial_neurons: int = 100
    initial_astrocytes: int = 10
    initial_microglia: int = 10
    cytokine_lifespan: int = 50
    seed: Optional[int] = None
    sweep_interval: int = 1
    statistics_interval: int = 10
    max_ticks: int = 1000
    filter_isolated_neurons: bool = False

    def __post_init__(self) -> None:
        for name in ("dimension_x", "dimension_y", "dimension_z"):
            if getattr(self, name) <= 0:
                raise ValidationError(f"{name} must be positive")
        for name in ("mitochondria_per_neuron", "initial_neurons", "initial_astrocytes", "initial_microglia", "max_ticks"):
            if getattr(self, name) < 0:
                raise ValidationError(f"{name} must not be negative")
        for name in ("cytokine_lifespan", "sweep_interval", "statistics_interval"):
            if getattr(self, name) <= 0:
                raise ValidationError(f"{name} must be positive")
        if not 0.0 <= self.base_degeneration_probability <= 1.0:
            raise ValidationError("base_degeneration_probability must lie in [0, 1]")
        if self.mito_transfer_threshold < 0:
            raise ValidationError("mito_transfer_threshold must not be negative")

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return (self.dimension_x, self.dimension_y, self.dimension_z)

    def replace(self, **overrides: Any) -> "SimulationConfig":
        """Return a validated copy with ``overrides`` applied; ``None`` values are ignored."""

        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def as_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        prefix: str = "PRK_",
    ) -> "SimulationConfig":
        """Create a configuration from ``<prefix><FIELD>`` environment variables.

        Values that cannot be parsed fall back to the defaults, e.g.
        ``PRK_INITIAL_NEURONS=250`` or ``PRK_SEED=7``.
        """

        env = env or os.environ
        defaults = cls()

        def _parse_int(name: str, default: Optional[int]) -> Optional[int]:
            try:
                return int(env[f"{prefix}{name.upper()}"])
            except (KeyError, TypeError, ValueError):
                return default

        def _parse_float(name: str, default: float) -> float:
            try:
                return float(env[f"{prefix}{name.upper()}"])
            except (KeyError, TypeError, ValueError):
                return default

        def _parse_bool(name: str, default: bool) -> bool:
            raw = str(env.get(f"{prefix}{name.upper()}", "")).strip().lower()
            if raw in _TRUE_VALUES:
                return True
            if raw in _FALSE_VALUES:
                return False
            return default

        values: dict[str, Any] = {}
        for item in fields(cls):
            default = getattr(defaults, item.name)
            if isinstance(default, bool):
                values[item.name] = _parse_bool(item.name, default)
            elif isinstance(default, float) or item.name.startswith("dimension_"):
                values[item.name] = _parse_float(item.name, default)
            else:
                values[item.name] = _parse_int(item.name, default)
        return cls(**values)


DEFAULT_SIMULATION_CONFIG = SimulationConfig()


__all__ = ["DEFAULT_SIMULATION_CONFIG", "SimulationConfig"]
