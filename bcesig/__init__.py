"""
BCE Signature - Standalone Implementation

This package provides a standalone implementation of the bce-auth-v1 request
signing scheme that doesn't depend on the BCE SDK for signing operations.
"""

from .bcev1 import (
    AUTH_VERSION,
    DEFAULT_HEADERS_TO_SIGN,
    BceV1Signer,
    Credentials,
    Headers,
    Params,
)
from .encoding import uri_encode

__version__ = "0.1.0"
__all__ = [
    "BceV1Signer",
    "Credentials",
    "DEFAULT_HEADERS_TO_SIGN",
    "AUTH_VERSION",
    "Headers",
    "Params",
    "uri_encode",
]
