"""Static whitelist circuit source."""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# a/b are the private halves of the decimal address, c/d the public copies
# a verifier contract can check against.
_PROGRAM = """
def main(private field a, private field b, public field c, public field d) -> bool{
    assert(a == c);
    assert(b == d);
    return true;
}
"""

_HASH_IMPORT = 'import "hashes/sha256/512bitPacked" as sha256packed;\n'

CIRCUIT_VARIANTS = {
    "plain": _PROGRAM,
    "hashed": _HASH_IMPORT + _PROGRAM,
}
DEFAULT_CIRCUIT_VARIANT = "plain"


def circuit_source(variant: str = DEFAULT_CIRCUIT_VARIANT) -> str:
    try:
        return CIRCUIT_VARIANTS[variant]
    except KeyError:
        valid = ", ".join(CIRCUIT_VARIANTS)
        raise ConfigurationError(
            f"Invalid circuit variant: {variant!r}. Valid options: {valid}"
        ) from None


def ensure_circuit_file(path: Path | str, variant: str = DEFAULT_CIRCUIT_VARIANT) -> bool:
    """
    Write the circuit source to ``path`` unless a file is already there.

    Returns:
        True if the file was created, False if it already existed.

    Raises:
        ConfigurationError: If the file is absent and cannot be written.
    """
    path = Path(path)
    source = circuit_source(variant)
    if path.exists():
        logger.debug("circuit file %s already present", path)
        return False
    try:
        path.write_text(source, encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"cannot create circuit file {path}: {exc}") from exc
    logger.info("wrote %s circuit to %s", variant, path)
    return True
