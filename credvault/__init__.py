"""Verifiable credential issuance and owner vaults on an in-memory contract host."""

__version__ = "0.20.0"
__all__ = ["env", "errors", "issuance", "vault"]