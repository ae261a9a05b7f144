"""Address-to-proof pipeline: encode, invoke the toolchain, extract, aggregate."""

from .aggregator import ResultAggregator
from .circuit import circuit_source, ensure_circuit_file
from .config import PipelineConfig, Policy, load_config
from .driver import PipelineDriver, PipelineState, RunSummary, read_addresses
from .encoder import CircuitInputs, encode_address, strip_leading_zeros
from .errors import (
    AddressDecodeError,
    AddressListError,
    ConfigurationError,
    OutputWriteError,
    ProofArtifactError,
    ProofParseError,
    ToolchainError,
    ToolchainInvocationError,
    ToolchainTimeoutError,
    WhitelistError,
)
from .extractor import Proof, ProofFile, extract, load_proof_file, parse_proof_document
from .gateway import InvocationResult, ToolchainGateway

__all__ = [
    "AddressDecodeError",
    "AddressListError",
    "CircuitInputs",
    "ConfigurationError",
    "InvocationResult",
    "OutputWriteError",
    "PipelineConfig",
    "PipelineDriver",
    "PipelineState",
    "Policy",
    "Proof",
    "ProofArtifactError",
    "ProofFile",
    "ProofParseError",
    "ResultAggregator",
    "RunSummary",
    "ToolchainError",
    "ToolchainGateway",
    "ToolchainInvocationError",
    "ToolchainTimeoutError",
    "WhitelistError",
    "circuit_source",
    "encode_address",
    "ensure_circuit_file",
    "extract",
    "load_config",
    "load_proof_file",
    "parse_proof_document",
    "read_addresses",
    "strip_leading_zeros",
]
