"""Tests for result accumulation and output writing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from zk_whitelist.pipeline.aggregator import ResultAggregator
from zk_whitelist.pipeline.errors import OutputWriteError
from zk_whitelist.pipeline.extractor import Proof, ProofFile


def _proof_file(tag: str) -> ProofFile:
    return ProofFile(
        proof=Proof(
            a=[f"0x{tag}a0", f"0x{tag}a1"],
            b=[[f"0x{tag}b0", f"0x{tag}b1"], [f"0x{tag}b2", f"0x{tag}b3"]],
            c=[f"0x{tag}c0", f"0x{tag}c1"],
        ),
        inputs=[f"0x{tag}i0", f"0x{tag}i1"],
        scheme="g16",
        curve="bn128",
    )


def test_single_entry_survives_json_round_trip(tmp_path: Path) -> None:
    results = ResultAggregator()
    results.add("0xAb8483F64d9C6d1EcF9b849Ae677dD3315835cb2", _proof_file("1"))
    path = results.write(tmp_path / "address-proof.json")

    loaded = json.loads(path.read_text(encoding="utf-8"))
    assert loaded == results.as_dict()
    entry = loaded["0xAb8483F64d9C6d1EcF9b849Ae677dD3315835cb2"]
    assert entry["proof"][0] == ["0x1a0", "0x1a1"]
    assert entry["proof"][1] == [["0x1b0", "0x1b1"], ["0x1b2", "0x1b3"]]
    assert entry["proof"][2] == ["0x1c0", "0x1c1"]
    assert entry["inputs"] == ["0x1i0", "0x1i1"]
    assert set(entry) == {"proof", "inputs"}


def test_output_is_pretty_printed_in_insertion_order() -> None:
    results = ResultAggregator()
    results.add("0xbbbb", _proof_file("2"))
    results.add("0xaaaa", _proof_file("3"))
    text = results.to_json()
    assert text.startswith('{\n  "0xbbbb": {')
    assert text.index("0xbbbb") < text.index("0xaaaa")
    assert results.addresses == ["0xbbbb", "0xaaaa"]


def test_duplicate_address_keeps_latest_entry() -> None:
    results = ResultAggregator()
    results.add("0xaaaa", _proof_file("1"))
    results.add("0xbbbb", _proof_file("2"))
    results.add("0xaaaa", _proof_file("3"))
    assert len(results) == 2
    assert results.addresses == ["0xaaaa", "0xbbbb"]
    assert results.as_dict()["0xaaaa"]["inputs"] == ["0x3i0", "0x3i1"]


def test_write_truncates_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "address-proof.json"
    path.write_text("x" * 10000, encoding="utf-8")
    ResultAggregator().write(path)
    assert json.loads(path.read_text(encoding="utf-8")) == {}


def test_write_failure_raises_output_write_error(tmp_path: Path) -> None:
    with pytest.raises(OutputWriteError):
        ResultAggregator().write(tmp_path / "missing-dir" / "out.json")
