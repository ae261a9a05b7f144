"""Tests for pipeline configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from zk_whitelist.pipeline.config import PipelineConfig, Policy, load_config
from zk_whitelist.pipeline.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ZK_WHITELIST_TOOLCHAIN", raising=False)
    monkeypatch.delenv("ZK_WHITELIST_TIMEOUT", raising=False)


def test_defaults() -> None:
    config = load_config()
    assert config.circuit_path == Path("whitelist.zok")
    assert config.addresses_path == Path("addresses.txt")
    assert config.output_path == Path("address-proof.json")
    assert config.toolchain_binary == "zokrates"
    assert config.export_verifier is True
    assert config.timeout is None
    assert config.witness_policy is Policy.STRICT
    assert config.proof_policy is Policy.STRICT
    assert config.decode_policy is Policy.TOLERANT


def test_relative_paths_resolve_against_workdir(tmp_path: Path) -> None:
    config = PipelineConfig(workdir=tmp_path, output_path="out/result.json")
    assert config.output_file == tmp_path / "out" / "result.json"
    assert config.circuit_file == tmp_path / "whitelist.zok"
    assert config.proof_artifact == tmp_path / "proof.json"
    absolute = tmp_path / "elsewhere.txt"
    assert PipelineConfig(addresses_path=absolute).addresses_file == absolute


def test_policy_parse_accepts_strings() -> None:
    assert Policy.parse("Tolerant") is Policy.TOLERANT
    assert Policy.parse(" strict ") is Policy.STRICT
    assert Policy.parse(Policy.STRICT) is Policy.STRICT


def test_invalid_policy_raises() -> None:
    with pytest.raises(ConfigurationError, match="Invalid policy"):
        Policy.parse("lenient")
    with pytest.raises(ConfigurationError, match="Invalid policy"):
        PipelineConfig(witness_policy="maybe")


def test_yaml_file_is_loaded(tmp_path: Path) -> None:
    path = tmp_path / "pipeline.yaml"
    path.write_text(
        "toolchain_binary: /opt/zokrates/bin/zokrates\n"
        "witness_policy: tolerant\n"
        "export_verifier: false\n"
        "timeout: 30\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.toolchain_binary == "/opt/zokrates/bin/zokrates"
    assert config.witness_policy is Policy.TOLERANT
    assert config.export_verifier is False
    assert config.timeout == 30.0


def test_precedence_override_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "pipeline.yaml"
    path.write_text("toolchain_binary: from-file\ntimeout: 5\n", encoding="utf-8")
    monkeypatch.setenv("ZK_WHITELIST_TOOLCHAIN", "from-env")

    config = load_config(path)
    assert config.toolchain_binary == "from-env"
    assert config.timeout == 5.0

    config = load_config(path, toolchain_binary="from-override", timeout=None)
    assert config.toolchain_binary == "from-override"
    assert config.timeout == 5.0


def test_env_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ZK_WHITELIST_TIMEOUT", "2.5")
    assert load_config().timeout == 2.5


def test_empty_yaml_file_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "pipeline.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == PipelineConfig()


@pytest.mark.parametrize(
    "content, message",
    [
        ("- a\n- b\n", "must contain a mapping"),
        ("outputs: x.json\n", "unknown config keys"),
        ("timeout: [1\n", "malformed config file"),
        ("timeout: -1\n", "timeout must be positive"),
        ("timeout: soon\n", "Invalid timeout"),
        ("export_verifier: sometimes\n", "export_verifier must be a boolean"),
        ("circuit_variant: poseidon\n", "Invalid circuit variant"),
    ],
)
def test_invalid_yaml_content_raises(tmp_path: Path, content: str, message: str) -> None:
    path = tmp_path / "pipeline.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError, match=message):
        load_config(path)


def test_unknown_override_raises() -> None:
    with pytest.raises(ConfigurationError, match="unknown config keys"):
        load_config(retries=3)


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="cannot read config file"):
        load_config(tmp_path / "absent.yaml")


def test_toolchain_circuit_path_is_relative_to_workdir() -> None:
    config = PipelineConfig(workdir="build", circuit_path="circuits/whitelist.zok")
    assert config.circuit_file == Path("build/circuits/whitelist.zok")
    assert config.toolchain_circuit_path == Path("circuits/whitelist.zok")
    absolute = Path("/opt/circuits/whitelist.zok")
    assert PipelineConfig(workdir="build", circuit_path=absolute).toolchain_circuit_path == absolute
