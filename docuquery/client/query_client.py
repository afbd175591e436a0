# QueryClient: the caller side of /api/generate.
#
# Holds a DocumentSession, loads documents into it, and asks grounded
# questions through the proxy. Results are kept as outcome objects and only
# turned into display text by render(), so nothing here raises on a failed
# network call.

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

import requests

from docuquery.settings import settings
from docuquery.log import get_logger
from .extract import (
    EmptyExtractionError,
    ExtractedDocument,
    ExtractionError,
    PresentationNotSupportedError,
    UnsupportedFileTypeError,
    check_extension,
    extract_document,
    extract_path,
)
from .prompts import build_grounding_prompt
from .retry import RetryExhaustedError, fetch_with_retry
from .session import DocumentSession

logger = get_logger("docuquery.client")

DEFAULT_MODEL = "gemini-2.0-flash"
EMPTY_RESPONSE_TEXT = "Sorry, I received an empty response from the AI."
ERROR_PREFIX = "An error occurred while communicating with the AI: "
NO_DOCUMENT_STATUS = "Please extract text from a document first!"


# ------------------------------------------------------------
# Outcomes
# ------------------------------------------------------------
@dataclass(frozen=True)
class Answered:
    text: str


@dataclass(frozen=True)
class Failed:
    message: str


@dataclass(frozen=True)
class Skipped:
    """Empty question; nothing was sent."""


@dataclass(frozen=True)
class NoDocument:
    """No extracted text yet; nothing was sent."""


@dataclass(frozen=True)
class Busy:
    """Another question is still in flight for this session."""


AskOutcome = Union[Answered, Failed, Skipped, NoDocument, Busy]


@dataclass(frozen=True)
class Loaded:
    document: ExtractedDocument


@dataclass(frozen=True)
class ExtractionFailed:
    message: str


ExtractionResult = Union[Loaded, ExtractionFailed]


def render(outcome: AskOutcome) -> str:
    if isinstance(outcome, Answered):
        return outcome.text
    if isinstance(outcome, Failed):
        return f"{ERROR_PREFIX}{outcome.message}"
    if isinstance(outcome, NoDocument):
        return NO_DOCUMENT_STATUS
    return ""


# ------------------------------------------------------------
# Client
# ------------------------------------------------------------
class QueryClient:
    def __init__(
        self,
        session: Optional[DocumentSession] = None,
        proxy_url: Optional[str] = None,
        model: Optional[str] = None,
        use_retry: bool = True,
        max_retries: int = 5,
        http: Optional[requests.Session] = None,
    ):
        self.session = session or DocumentSession()
        self.proxy_url = proxy_url or settings.PROXY_URL
        self.model = model or DEFAULT_MODEL
        self.use_retry = use_retry
        self.max_retries = max_retries
        self.http = http or requests.Session()

    # --- documents ---
    def load_document(self, file_name: str, data: bytes, mime_type: Optional[str] = None) -> ExtractionResult:
        try:
            document = extract_document(file_name, data, mime_type)
        except ExtractionError as e:
            return self._extraction_failed(file_name, e)
        return self._loaded(document)

    def load_path(self, path: str) -> ExtractionResult:
        try:
            document = extract_path(path)
        except ExtractionError as e:
            return self._extraction_failed(path, e)
        except OSError as e:
            return self._extraction_failed(path, ExtractionError(str(e)))
        return self._loaded(document)

    def accepts(self, file_name: str) -> bool:
        try:
            check_extension(file_name)
        except ExtractionError as e:
            self.session.set_status(str(e), "error")
            return False
        return True

    def _loaded(self, document: ExtractedDocument) -> Loaded:
        self.session.set_document(document)
        self.session.set_status(
            f"Successfully extracted text from {document.file_type}. Ready for Q&A!", "success"
        )
        return Loaded(document)

    def _extraction_failed(self, file_name: str, err: ExtractionError) -> ExtractionFailed:
        logger.error("Extraction error for %s: %s", file_name, err)
        message = str(err)
        # the PPTX rejection leaves the current document in place
        if not isinstance(err, PresentationNotSupportedError):
            self.session.clear_document()
        if not isinstance(err, (UnsupportedFileTypeError, EmptyExtractionError)):
            message = f"An error occurred during extraction: {message}"
        self.session.set_status(message, "error")
        return ExtractionFailed(message)

    # --- questions ---
    def build_request(self, user_query: str) -> Dict[str, Any]:
        text = self.session.extracted_text or ""
        return {
            "userQuery": user_query,
            "systemPrompt": build_grounding_prompt(text),
            "extractedText": text,
            "model": self.model,
        }

    def ask(self, user_query: str) -> AskOutcome:
        question = (user_query or "").strip()
        if not question:
            return Skipped()
        if not self.session.extracted_text:
            self.session.set_status(NO_DOCUMENT_STATUS, "warning")
            return NoDocument()
        if not self.session.try_begin():
            return Busy()

        try:
            self.session.add_message("user", question)
            outcome = self._call_proxy(question)
            self.session.add_message("model", render(outcome))
        finally:
            self.session.end()
        return outcome

    def _call_proxy(self, question: str) -> Union[Answered, Failed]:
        body = self.build_request(question)
        try:
            if self.use_retry:
                resp = fetch_with_retry(
                    "POST", self.proxy_url, max_retries=self.max_retries, session=self.http, json=body
                )
            else:
                resp = self.http.post(self.proxy_url, json=body)
            if not resp.ok:
                return Failed(f"HTTP {resp.status_code}: {resp.text.strip()[:500]}")
            data = resp.json()
        except (requests.RequestException, RetryExhaustedError, ValueError) as e:
            logger.error("Proxy call failed: %s", e)
            return Failed(str(e) or type(e).__name__)

        text = data.get("text") if isinstance(data, dict) else None
        return Answered(text or EMPTY_RESPONSE_TEXT)
