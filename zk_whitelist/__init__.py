"""Batch zero-knowledge whitelist proof generation for Ethereum addresses."""

__version__ = "0.1.0"
