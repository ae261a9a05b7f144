"""Default paths and toolchain names for the whitelist proof pipeline."""

from __future__ import annotations

DEFAULT_TOOLCHAIN_BINARY = "zokrates"
DEFAULT_CIRCUIT_PATH = "whitelist.zok"
DEFAULT_ADDRESSES_PATH = "addresses.txt"
DEFAULT_OUTPUT_PATH = "address-proof.json"

# Written by `generate-proof` into the toolchain working directory.
PROOF_ARTIFACT_NAME = "proof.json"

CMD_COMPILE = "compile"
CMD_SETUP = "setup"
CMD_EXPORT_VERIFIER = "export-verifier"
CMD_COMPUTE_WITNESS = "compute-witness"
CMD_GENERATE_PROOF = "generate-proof"

ADDRESS_PREFIXES = ("0x", "0X")

ENV_TOOLCHAIN = "ZK_WHITELIST_TOOLCHAIN"
ENV_TIMEOUT = "ZK_WHITELIST_TIMEOUT"

OUTPUT_INDENT = 2
