"""Accumulate per-address proofs and write the result document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .constants import OUTPUT_INDENT
from .errors import OutputWriteError
from .extractor import ProofFile

logger = logging.getLogger(__name__)


class ResultAggregator:
    """
    Address -> ``{"proof": [a, b, c], "inputs": [...]}`` map.

    Keys keep insertion order, so the output follows the address list.
    A repeated address replaces the earlier entry in place.
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, address: object) -> bool:
        return address in self._entries

    @property
    def addresses(self) -> list[str]:
        return list(self._entries)

    def add(self, address: str, proof_file: ProofFile) -> None:
        if address in self._entries:
            logger.warning("address %s listed more than once; keeping the latest proof", address)
        self._entries[address] = proof_file.to_entry()

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {address: dict(entry) for address, entry in self._entries.items()}

    def to_json(self) -> str:
        return json.dumps(self._entries, indent=OUTPUT_INDENT)

    def write(self, path: Path | str) -> Path:
        """Create or truncate ``path`` and write the JSON document."""
        path = Path(path)
        try:
            path.write_text(self.to_json(), encoding="utf-8")
        except OSError as exc:
            raise OutputWriteError(f"cannot write results to {path}: {exc}") from exc
        logger.info("wrote %d proof(s) to %s", len(self._entries), path)
        return path
