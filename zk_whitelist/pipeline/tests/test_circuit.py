"""Tests for the circuit source asset."""

from __future__ import annotations

from pathlib import Path

import pytest

from zk_whitelist.pipeline.circuit import circuit_source, ensure_circuit_file
from zk_whitelist.pipeline.errors import ConfigurationError


def test_creates_circuit_when_absent(tmp_path: Path) -> None:
    path = tmp_path / "whitelist.zok"
    assert ensure_circuit_file(path) is True
    text = path.read_text(encoding="utf-8")
    assert "private field a, private field b, public field c, public field d" in text
    assert "assert(a == c);" in text
    assert "assert(b == d);" in text
    assert "import" not in text


def test_existing_file_is_left_untouched(tmp_path: Path) -> None:
    path = tmp_path / "whitelist.zok"
    path.write_text("custom circuit\n", encoding="utf-8")
    assert ensure_circuit_file(path, "hashed") is False
    assert path.read_text(encoding="utf-8") == "custom circuit\n"


def test_hashed_variant_adds_import() -> None:
    hashed = circuit_source("hashed")
    assert hashed.startswith('import "hashes/sha256/512bitPacked"')
    assert hashed.endswith(circuit_source("plain"))


def test_unknown_variant_raises() -> None:
    with pytest.raises(ConfigurationError, match="Invalid circuit variant"):
        circuit_source("poseidon")


def test_unwritable_location_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="cannot create circuit file"):
        ensure_circuit_file(tmp_path / "no-such-dir" / "whitelist.zok")
