"""Error types for the whitelist proof pipeline."""

from __future__ import annotations

from typing import Optional, Sequence


class WhitelistError(Exception):
    """Base error for whitelist proof generation."""


class ConfigurationError(WhitelistError):
    """Invalid configuration, or the circuit file could not be created."""


class AddressListError(WhitelistError):
    """The address list file is missing or unreadable."""


class ToolchainError(WhitelistError):
    """An external toolchain invocation did not succeed."""

    def __init__(self, message: str, command: str, args: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command = command
        self.args_list = tuple(args)


class ToolchainInvocationError(ToolchainError):
    """The toolchain exited non-zero or could not be spawned."""

    def __init__(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        binary: str = "",
        returncode: Optional[int] = None,
        stderr: str = "",
        reason: str = "",
    ) -> None:
        message = f"Command '{command}' with arguments '{' '.join(args)}' failed"
        if reason:
            message = f"{message}: {reason}"
        elif returncode is not None:
            message = f"{message} with exit status {returncode}"
        super().__init__(message, command, args)
        self.binary = binary
        self.returncode = returncode
        self.stderr = stderr


class ToolchainTimeoutError(ToolchainError):
    """The toolchain did not finish within the configured timeout."""

    def __init__(self, command: str, args: Sequence[str], timeout: float) -> None:
        super().__init__(
            f"Command '{command}' with arguments '{' '.join(args)}' "
            f"timed out after {timeout:g}s",
            command,
            args,
        )
        self.timeout = timeout


class AddressDecodeError(WhitelistError):
    """An address line could not be parsed as a hexadecimal number."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"cannot decode address {address!r}: {reason}")
        self.address = address


class ProofParseError(WhitelistError):
    """The proof artifact is missing or does not have the expected shape."""


class OutputWriteError(WhitelistError):
    """The result file could not be written."""


class ProofArtifactError(WhitelistError):
    """A stale proof artifact could not be removed before proving."""
