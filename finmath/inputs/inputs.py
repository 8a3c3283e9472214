# finmath/inputs/inputs.py
"""
Solver configuration loader.

Goals
-----
- File-first ToleranceConfig with validation via Pydantic.
- Accept both a flat config and one nested under an "irr" key.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Flat (root = ToleranceConfig)
   { "max_iterations": 500, "convergence_epsilon": 1e-9 }

2) Nested
   { "irr": { "initial_guess": 0.05, "lower_bound": -0.5, "upper_bound": 2.0 } }

Environment overrides (optional)
--------------------------------
- FINMATH_IRR_MAX_ITERATIONS -> max_iterations (int)
- FINMATH_IRR_EPSILON        -> convergence_epsilon (float)
- FINMATH_IRR_INITIAL_GUESS  -> initial_guess (float)
- FINMATH_IRR_LOWER_BOUND    -> lower_bound (float)
- FINMATH_IRR_UPPER_BOUND    -> upper_bound (float)

Public API
----------
- class ToleranceLoader:
    - load(path) -> ToleranceConfig
    - load_json(text) -> ToleranceConfig
    - from_env() -> ToleranceConfig
    - with_overrides(cfg, **kwargs) -> ToleranceConfig (non-destructive copy)
- function load_tolerance(path=None) -> ToleranceConfig  (convenience)
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from finmath.schemas.models import ToleranceConfig

_ENV_FIELDS: dict[str, tuple[str, type]] = {
    "MAX_ITERATIONS": ("max_iterations", int),
    "EPSILON": ("convergence_epsilon", float),
    "INITIAL_GUESS": ("initial_guess", float),
    "LOWER_BOUND": ("lower_bound", float),
    "UPPER_BOUND": ("upper_bound", float),
}


@dataclass(frozen=True)
class ToleranceLoader:
    """
    File-first ToleranceConfig loader with light env overrides.

    Env overrides apply on top of whatever the file (or defaults) specify.
    """

    env_prefix: str = "FINMATH_IRR_"
    environ: Mapping[str, str] | None = None

    # ---------- Public API ----------

    def load(self, path: str | Path) -> ToleranceConfig:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Tolerance config not found: {p}")
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported config format for {p.name}; only .json is supported.")
        return self.load_json(p.read_text(encoding="utf-8"))

    def load_json(self, text: str) -> ToleranceConfig:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Tolerance config JSON root must be an object.")
        data = raw.get("irr", raw)
        if not isinstance(data, dict):
            raise ValueError('"irr" section must be an object.')
        return self._apply_env_overrides(data)

    def from_env(self) -> ToleranceConfig:
        return self._apply_env_overrides({})

    def with_overrides(
        self,
        cfg: ToleranceConfig,
        *,
        max_iterations: int | None = None,
        convergence_epsilon: float | None = None,
        initial_guess: float | None = None,
        lower_bound: float | None = None,
        upper_bound: float | None = None,
    ) -> ToleranceConfig:
        """
        Return a *new* ToleranceConfig with the non-null overrides applied.
        Re-validates, so an override that breaks an invariant raises.
        """
        updates: dict[str, Any] = {
            k: v
            for k, v in (
                ("max_iterations", max_iterations),
                ("convergence_epsilon", convergence_epsilon),
                ("initial_guess", initial_guess),
                ("lower_bound", lower_bound),
                ("upper_bound", upper_bound),
            )
            if v is not None
        }
        if not updates:
            return cfg
        # model_copy skips validation; rebuild instead
        return ToleranceConfig.model_validate({**cfg.model_dump(), **updates})

    # ---------- Internals ----------

    def _apply_env_overrides(self, data: dict[str, Any]) -> ToleranceConfig:
        env = self.environ if self.environ is not None else os.environ
        merged = dict(data)
        for suffix, (field, cast) in _ENV_FIELDS.items():
            val = env.get(f"{self.env_prefix}{suffix}")
            if val is None or not val.strip():
                continue
            try:
                merged[field] = cast(val.strip())
            except ValueError as e:
                raise ValueError(f"{self.env_prefix}{suffix} must be {cast.__name__}, got {val!r}") from e
        return ToleranceConfig.model_validate(merged)


def load_tolerance(path: str | Path | None = None) -> ToleranceConfig:
    """Load from `path` when given, else defaults + environment overrides."""
    loader = ToleranceLoader()
    return loader.load(path) if path is not None else loader.from_env()


__all__ = ["ToleranceLoader", "load_tolerance"]
