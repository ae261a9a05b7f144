"""Read proof artifacts written by the toolchain's ``generate-proof``."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from .constants import PROOF_ARTIFACT_NAME
from .errors import ProofParseError


@dataclass(frozen=True)
class Proof:
    """Group element encodings, kept as the toolchain emitted them."""

    a: list[str]
    b: list[list[str]]
    c: list[str]


@dataclass(frozen=True)
class ProofFile:
    proof: Proof
    inputs: list[str]
    scheme: Optional[str] = None
    curve: Optional[str] = None

    def to_entry(self) -> dict[str, Any]:
        return {
            "proof": [list(self.proof.a), [list(row) for row in self.proof.b], list(self.proof.c)],
            "inputs": list(self.inputs),
        }


def _require(data: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise ProofParseError(f"missing field '{key}' in {where}")
    return data[key]


def _require_str_list(value: Any, field: str) -> list[str]:
    if not isinstance(value, list):
        raise ProofParseError(f"{field} must be a list")
    for idx, item in enumerate(value):
        if not isinstance(item, str):
            raise ProofParseError(f"{field}[{idx}] must be a string")
    return list(value)


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ProofParseError(f"{key} must be a string")
    return value


def parse_proof_document(data: Any) -> ProofFile:
    """
    Validate a decoded proof document.

    Unknown keys are ignored. ``scheme`` and ``curve`` are kept when present
    but are not required: the toolchain always writes them, yet nothing
    downstream reads them, so a document without them still yields a
    usable proof. Only ``proof.a``, ``proof.b``, ``proof.c`` and ``inputs``
    are mandatory.

    Raises:
        ProofParseError: If ``proof`` or any of ``a``/``b``/``c``/``inputs``
            is missing or has the wrong shape.
    """
    if not isinstance(data, dict):
        raise ProofParseError("proof document must be a JSON object")

    raw_proof = _require(data, "proof", "proof document")
    if not isinstance(raw_proof, dict):
        raise ProofParseError("proof must be a JSON object")

    a = _require_str_list(_require(raw_proof, "a", "proof"), "proof.a")
    raw_b = _require(raw_proof, "b", "proof")
    if not isinstance(raw_b, list):
        raise ProofParseError("proof.b must be a list")
    b = [_require_str_list(row, f"proof.b[{idx}]") for idx, row in enumerate(raw_b)]
    c = _require_str_list(_require(raw_proof, "c", "proof"), "proof.c")
    inputs = _require_str_list(_require(data, "inputs", "proof document"), "inputs")

    return ProofFile(
        proof=Proof(a=a, b=b, c=c),
        inputs=inputs,
        scheme=_optional_str(data, "scheme"),
        curve=_optional_str(data, "curve"),
    )


def load_proof_file(path: Path | str) -> ProofFile:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ProofParseError(f"proof file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ProofParseError(f"cannot read proof file {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ProofParseError(f"malformed JSON in {path}: {exc}") from exc
    return parse_proof_document(data)


def extract(workdir: Path | str = ".") -> tuple[Proof, list[str]]:
    """Return ``(proof, inputs)`` from the toolchain's ``proof.json``."""
    proof_file = load_proof_file(Path(workdir) / PROOF_ARTIFACT_NAME)
    return proof_file.proof, proof_file.inputs
