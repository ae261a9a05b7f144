"""Sequential driver for the address-to-proof pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .aggregator import ResultAggregator
from .circuit import ensure_circuit_file
from .config import PipelineConfig, Policy
from .encoder import encode_address
from .errors import (
    AddressDecodeError,
    AddressListError,
    ProofArtifactError,
    ProofParseError,
    ToolchainError,
)
from .extractor import load_proof_file
from .gateway import ToolchainGateway

logger = logging.getLogger(__name__)


class PipelineState(str, Enum):
    INIT = "init"
    CIRCUIT_READY = "circuit_ready"
    COMPILED = "compiled"
    SETUP_DONE = "setup_done"
    VERIFIER_EXPORTED = "verifier_exported"
    PROCESSING_ADDRESSES = "processing_addresses"
    DONE = "done"


@dataclass
class SkippedAddress:
    address: str
    stage: str
    reason: str


@dataclass
class RunSummary:
    attempted: int = 0
    written: list[str] = field(default_factory=list)
    skipped: list[SkippedAddress] = field(default_factory=list)
    output_path: Optional[Path] = None
    circuit_created: bool = False
    state: PipelineState = PipelineState.INIT


def read_addresses(path: Path | str) -> Iterator[str]:
    """Yield one address per line, line terminators removed."""
    path = Path(path)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as exc:
        raise AddressListError(f"cannot open address list {path}: {exc}") from exc
    with handle:
        try:
            for line in handle:
                yield line.rstrip("\r\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise AddressListError(f"cannot read address list {path}: {exc}") from exc


class PipelineDriver:
    """
    Run compile -> setup -> export-verifier, then prove each address in turn.

    The driver owns the ResultAggregator for the whole run. Fatal errors
    propagate out of ``run`` before anything is written; non-fatal ones are
    logged and recorded in the RunSummary.
    """

    def __init__(
        self,
        config: PipelineConfig,
        gateway: Optional[ToolchainGateway] = None,
    ) -> None:
        self.config = config
        self.gateway = gateway or ToolchainGateway(
            binary=config.toolchain_binary,
            workdir=config.workdir,
            timeout=config.timeout,
        )
        self.state = PipelineState.INIT
        self.results = ResultAggregator()
        self.summary = RunSummary()

    def _advance(self, state: PipelineState) -> None:
        logger.debug("pipeline state %s -> %s", self.state.value, state.value)
        self.state = state
        self.summary.state = state

    def run(self) -> RunSummary:
        self.prepare_circuit()
        self.compile()
        self.setup()
        if self.config.export_verifier:
            self.export_verifier()
        self.process_addresses(read_addresses(self.config.addresses_file))
        return self.finish()

    def prepare_circuit(self) -> None:
        self.summary.circuit_created = ensure_circuit_file(
            self.config.circuit_file, self.config.circuit_variant
        )
        self._advance(PipelineState.CIRCUIT_READY)

    def compile(self) -> None:
        logger.info("compiling %s", self.config.circuit_file)
        self.gateway.compile(self.config.toolchain_circuit_path)
        self._advance(PipelineState.COMPILED)

    def setup(self) -> None:
        logger.info("running trusted setup")
        self.gateway.setup()
        self._advance(PipelineState.SETUP_DONE)

    def export_verifier(self) -> None:
        logger.info("exporting verifier contract")
        self.gateway.export_verifier()
        self._advance(PipelineState.VERIFIER_EXPORTED)

    def process_addresses(self, addresses: Iterable[str]) -> None:
        self._advance(PipelineState.PROCESSING_ADDRESSES)
        for address in addresses:
            self.process_address(address)

    def process_address(self, address: str) -> bool:
        """
        Prove one address and record the result.

        Returns:
            True if an entry was added for ``address``.
        """
        self.summary.attempted += 1

        try:
            inputs = encode_address(address)
        except AddressDecodeError as exc:
            return self._fail(address, "decode", exc, self.config.decode_policy)

        self._clear_proof_artifact()

        try:
            self.gateway.compute_witness(inputs.arguments())
        except ToolchainError as exc:
            return self._fail(address, "compute-witness", exc, self.config.witness_policy)

        try:
            self.gateway.generate_proof()
        except ToolchainError as exc:
            return self._fail(address, "generate-proof", exc, self.config.proof_policy)

        try:
            proof_file = load_proof_file(self.config.proof_artifact)
        except ProofParseError as exc:
            return self._fail(address, "extract", exc, Policy.TOLERANT)

        self.results.add(address, proof_file)
        self.summary.written.append(address)
        logger.info("proof generated for %s", address)
        return True

    def finish(self) -> RunSummary:
        self._advance(PipelineState.DONE)
        self.summary.output_path = self.results.write(self.config.output_file)
        return self.summary

    def _fail(self, address: str, stage: str, exc: Exception, policy: Policy) -> bool:
        if policy is Policy.STRICT:
            logger.error("%s failed for %s: %s", stage, address, exc)
            raise exc
        logger.warning("skipping %s: %s failed: %s", address, stage, exc)
        self.summary.skipped.append(SkippedAddress(address=address, stage=stage, reason=str(exc)))
        return False

    def _clear_proof_artifact(self) -> None:
        artifact = self.config.proof_artifact
        try:
            artifact.unlink()
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise ProofArtifactError(f"cannot remove stale proof artifact {artifact}: {exc}") from exc
