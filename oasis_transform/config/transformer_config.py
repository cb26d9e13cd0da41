################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""High-level configuration wrapper for the transformer core."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from oasis_transform.errors.transformer_errors import TransformerConfigError
from oasis_transform.timing.time_base import sec_to_ns
from oasis_transform.transform_types.extrapolation_policy import ExtrapolationPolicy

from .transformer_params import TransformerParams
from .transformer_params import TransformerParamsError


# Top-level YAML key that may wrap the parameter mapping
YAML_ROOT_KEY: str = "transformer"


@dataclass(frozen=True)
class TransformerConfig:
    """Convenience wrapper around validated transformer parameters."""

    params: TransformerParams

    def __init__(self, params: TransformerParams | None = None) -> None:
        """Initialize the configuration wrapper and validate."""
        object.__setattr__(
            self, "params", params if params is not None else TransformerParams()
        )
        self.validate()

    def validate(self) -> None:
        """Validate parameter invariants."""
        try:
            self.params.validate()
        except TransformerParamsError as exc:
            raise TransformerConfigError(str(exc)) from exc

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> TransformerConfig:
        """Build a configuration from a flat mapping of parameter values."""
        try:
            params: TransformerParams = TransformerParams.from_dict(values)
        except (TransformerParamsError, TypeError) as exc:
            raise TransformerConfigError(str(exc)) from exc
        return cls(params)

    @classmethod
    def from_yaml_text(cls, text: str) -> TransformerConfig:
        """Parse YAML text into a configuration.

        The mapping may be given at the document root or nested under a
        ``transformer`` key. An empty document yields the defaults.
        """
        try:
            loaded: Any = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise TransformerConfigError(f"Invalid YAML: {exc}") from exc
        if loaded is None:
            return cls()
        if not isinstance(loaded, dict):
            raise TransformerConfigError("YAML root must be a mapping")
        if YAML_ROOT_KEY in loaded:
            loaded = loaded[YAML_ROOT_KEY] or {}
            if not isinstance(loaded, dict):
                raise TransformerConfigError(f"{YAML_ROOT_KEY} must be a mapping")
        return cls.from_dict(loaded)

    @classmethod
    def from_yaml_file(cls, path: str | Path) -> TransformerConfig:
        """Load a configuration from a YAML file."""
        file_path: Path = Path(path)
        try:
            text: str = file_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise TransformerConfigError(
                f"Failed to read config {file_path}: {exc}"
            ) from exc
        return cls.from_yaml_text(text)

    def to_yaml_text(self) -> str:
        """Serialize the configuration under the ``transformer`` key."""
        return str(
            yaml.safe_dump(
                {YAML_ROOT_KEY: self.params.as_nested_dict()}, sort_keys=True
            )
        )

    def cache_time_ns(self) -> int:
        """Return the retained history span in nanoseconds."""
        return sec_to_ns(self.params.cache_time_sec)

    def policy(self) -> ExtrapolationPolicy:
        """Return the configured extrapolation policy."""
        return ExtrapolationPolicy.parse(self.params.extrapolation_policy)

    def max_extrapolation_ns(self) -> int:
        """Return the linear extrapolation limit in nanoseconds."""
        return sec_to_ns(self.params.max_extrapolation_sec)

    def request_timeout_sec(self) -> float:
        """Return the default asynchronous request deadline in seconds."""
        return float(self.params.request_timeout_sec)

    def max_buffer_length(self) -> int:
        """Return the per-frame sample cap."""
        return self.params.max_buffer_length

    def __str__(self) -> str:
        p: TransformerParams = self.params
        return (
            f"TransformerConfig[cache_time={p.cache_time_sec}s, "
            f"policy={p.extrapolation_policy}, "
            f"max_extrapolation={p.max_extrapolation_sec}s, "
            f"request_timeout={p.request_timeout_sec}s, "
            f"max_buffer_length={p.max_buffer_length}]"
        )
