"""Subprocess gateway to the external zk-SNARK toolchain."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .constants import (
    CMD_COMPILE,
    CMD_COMPUTE_WITNESS,
    CMD_EXPORT_VERIFIER,
    CMD_GENERATE_PROOF,
    CMD_SETUP,
    DEFAULT_TOOLCHAIN_BINARY,
)
from .errors import ToolchainInvocationError, ToolchainTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvocationResult:
    command: str
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


class ToolchainGateway:
    """
    Run toolchain subcommands inside a working directory.

    Every call blocks until the process exits (or ``timeout`` elapses).
    Failures raise; callers decide whether a failure is fatal.
    """

    def __init__(
        self,
        binary: str = DEFAULT_TOOLCHAIN_BINARY,
        workdir: Path | str = ".",
        timeout: Optional[float] = None,
    ) -> None:
        self.binary = binary
        self.workdir = Path(workdir)
        self.timeout = timeout

    def invoke(self, command: str, *args: str) -> InvocationResult:
        argv = [self.binary, command, *args]
        logger.debug("running %s (cwd=%s)", " ".join(argv), self.workdir)
        try:
            result = subprocess.run(
                argv,
                cwd=self.workdir,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ToolchainTimeoutError(command, args, self.timeout) from exc
        except OSError as exc:
            raise ToolchainInvocationError(
                command, args, binary=self.binary, reason=str(exc)
            ) from exc

        if result.stdout:
            logger.debug("%s stdout: %s", command, result.stdout.strip())
        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise ToolchainInvocationError(
                command,
                args,
                binary=self.binary,
                returncode=result.returncode,
                stderr=stderr,
            )
        return InvocationResult(
            command=command,
            args=tuple(args),
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def compile(self, circuit_path: Path | str) -> InvocationResult:
        return self.invoke(CMD_COMPILE, "-i", str(circuit_path))

    def setup(self) -> InvocationResult:
        return self.invoke(CMD_SETUP)

    def export_verifier(self) -> InvocationResult:
        return self.invoke(CMD_EXPORT_VERIFIER)

    def compute_witness(self, arguments: Sequence[str]) -> InvocationResult:
        return self.invoke(CMD_COMPUTE_WITNESS, "-a", *arguments)

    def generate_proof(self) -> InvocationResult:
        return self.invoke(CMD_GENERATE_PROOF)
