"""
Swiftype Enterprise Search client.

Submit Content Source documents for indexing, wait on their document
receipts, and destroy documents by external ID.
"""

__version__ = "0.1.0"

from .client import Client
from .config import Configuration, load_configuration
from .documents import normalize_document, normalize_documents
from .errors import (
    BadRequest,
    ClientException,
    ConfigurationError,
    Forbidden,
    InvalidCredentials,
    InvalidDocument,
    NonExistentRecord,
    RecordAlreadyExists,
    Timeout,
    TransportError,
    UnexpectedHTTPException,
)
from .polling import poll

__all__ = [
    "Client",
    "Configuration",
    "load_configuration",
    "normalize_document",
    "normalize_documents",
    "poll",
    "BadRequest",
    "ClientException",
    "ConfigurationError",
    "Forbidden",
    "InvalidCredentials",
    "InvalidDocument",
    "NonExistentRecord",
    "RecordAlreadyExists",
    "Timeout",
    "TransportError",
    "UnexpectedHTTPException",
]
