# Client side of DocuQuery: extraction, session state, retrying proxy calls.

from .query_client import QueryClient, render, Answered, Failed, Skipped, NoDocument, Busy, Loaded, ExtractionFailed
from .retry import fetch_with_retry, RetryPolicy, RetryExhaustedError
from .session import DocumentSession, Status
from .extract import extract_document, ExtractionError, UnsupportedFileTypeError, EmptyExtractionError

__all__ = [
    "QueryClient",
    "render",
    "Answered",
    "Failed",
    "Skipped",
    "NoDocument",
    "Busy",
    "Loaded",
    "ExtractionFailed",
    "fetch_with_retry",
    "RetryPolicy",
    "RetryExhaustedError",
    "DocumentSession",
    "Status",
    "extract_document",
    "ExtractionError",
    "UnsupportedFileTypeError",
    "EmptyExtractionError",
]
