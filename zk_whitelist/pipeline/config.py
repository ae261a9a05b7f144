"""
Pipeline configuration.

Values resolve in precedence order: explicit overrides, environment
variables, an optional YAML file, then built-in defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import yaml

from .circuit import CIRCUIT_VARIANTS, DEFAULT_CIRCUIT_VARIANT
from .constants import (
    DEFAULT_ADDRESSES_PATH,
    DEFAULT_CIRCUIT_PATH,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_TOOLCHAIN_BINARY,
    ENV_TIMEOUT,
    ENV_TOOLCHAIN,
    PROOF_ARTIFACT_NAME,
)
from .errors import ConfigurationError


class Policy(str, Enum):
    """Whether a failing step aborts the run or skips the address."""

    STRICT = "strict"
    TOLERANT = "tolerant"

    @classmethod
    def parse(cls, value: "Policy | str") -> "Policy":
        if isinstance(value, Policy):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        valid = ", ".join(policy.value for policy in cls)
        raise ConfigurationError(f"Invalid policy: {value!r}. Valid options: {valid}")


@dataclass(frozen=True)
class PipelineConfig:
    workdir: Path = Path(".")
    circuit_path: Path = Path(DEFAULT_CIRCUIT_PATH)
    addresses_path: Path = Path(DEFAULT_ADDRESSES_PATH)
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    toolchain_binary: str = DEFAULT_TOOLCHAIN_BINARY
    export_verifier: bool = True
    circuit_variant: str = DEFAULT_CIRCUIT_VARIANT
    timeout: Optional[float] = None
    witness_policy: Policy = Policy.STRICT
    proof_policy: Policy = Policy.STRICT
    decode_policy: Policy = Policy.TOLERANT

    def __post_init__(self) -> None:
        # Normalise loosely typed values (YAML, CLI strings) in place.
        for name in ("workdir", "circuit_path", "addresses_path", "output_path"):
            object.__setattr__(self, name, Path(getattr(self, name)))
        for name in ("witness_policy", "proof_policy", "decode_policy"):
            object.__setattr__(self, name, Policy.parse(getattr(self, name)))
        object.__setattr__(self, "timeout", _parse_timeout(self.timeout))
        if not isinstance(self.export_verifier, bool):
            raise ConfigurationError("export_verifier must be a boolean")
        if not isinstance(self.toolchain_binary, str) or not self.toolchain_binary:
            raise ConfigurationError("toolchain_binary must be a non-empty string")
        if self.circuit_variant not in CIRCUIT_VARIANTS:
            valid = ", ".join(CIRCUIT_VARIANTS)
            raise ConfigurationError(
                f"Invalid circuit variant: {self.circuit_variant!r}. Valid options: {valid}"
            )

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.workdir / path

    @property
    def circuit_file(self) -> Path:
        return self.resolve(self.circuit_path)

    @property
    def toolchain_circuit_path(self) -> Path:
        # The toolchain runs inside workdir, so relative paths stay relative.
        return self.circuit_path

    @property
    def addresses_file(self) -> Path:
        return self.resolve(self.addresses_path)

    @property
    def output_file(self) -> Path:
        return self.resolve(self.output_path)

    @property
    def proof_artifact(self) -> Path:
        return self.workdir / PROOF_ARTIFACT_NAME


_FIELD_NAMES = frozenset(f.name for f in fields(PipelineConfig))


def _parse_timeout(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigurationError("timeout must be a number of seconds")
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid timeout: {value!r}") from None
    if timeout <= 0:
        raise ConfigurationError("timeout must be positive")
    return timeout


def _read_yaml(path: Path | str) -> dict[str, Any]:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigurationError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"malformed config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config file {path} must contain a mapping")
    unknown = sorted(set(data) - _FIELD_NAMES)
    if unknown:
        raise ConfigurationError(f"unknown config keys in {path}: {', '.join(map(str, unknown))}")
    return data


def _read_env() -> dict[str, Any]:
    values: dict[str, Any] = {}
    binary = os.getenv(ENV_TOOLCHAIN)
    if binary:
        values["toolchain_binary"] = binary
    timeout = os.getenv(ENV_TIMEOUT)
    if timeout:
        values["timeout"] = timeout
    return values


def load_config(path: Path | str | None = None, **overrides: Any) -> PipelineConfig:
    """
    Build a PipelineConfig.

    Args:
        path: Optional YAML file whose top-level keys are PipelineConfig fields.
        **overrides: Field values that win over everything else. ``None``
            values are treated as "not given".

    Raises:
        ConfigurationError: On unreadable files, unknown keys or bad values.
    """
    unknown = sorted(set(overrides) - _FIELD_NAMES)
    if unknown:
        raise ConfigurationError(f"unknown config keys: {', '.join(unknown)}")

    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_yaml(path))
    values.update(_read_env())
    values.update({key: value for key, value in overrides.items() if value is not None})
    return PipelineConfig(**values)

