# In-memory state of one Q&A session: the current document, the chat
# transcript, the last status line, and whether an ask is in flight.

from __future__ import annotations
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from docuquery.generate.types import Message
from .extract import ExtractedDocument

AWAITING_UPLOAD = "Awaiting file upload (PDF, DOCX, TXT, or PPTX)."


@dataclass
class Status:
    text: str
    level: str = "warning"  # warning | error | success


@dataclass
class DocumentSession:
    document: Optional[ExtractedDocument] = None
    transcript: List[Message] = field(default_factory=list)
    status: Status = field(default_factory=lambda: Status(AWAITING_UPLOAD, "warning"))
    _in_flight: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @property
    def extracted_text(self) -> Optional[str]:
        return self.document.text if self.document else None

    @property
    def busy(self) -> bool:
        return self._in_flight.locked()

    def set_status(self, text: str, level: str = "warning") -> None:
        self.status = Status(text, level)

    def set_document(self, document: ExtractedDocument) -> None:
        self.document = document

    def clear_document(self) -> None:
        self.document = None

    def add_message(self, role: str, content: str) -> None:
        self.transcript.append(Message(role=role, content=content))

    def try_begin(self) -> bool:
        return self._in_flight.acquire(blocking=False)

    def end(self) -> None:
        self._in_flight.release()

    def reset(self) -> None:
        """Back to the upload screen: forget the document and the chat."""
        self.document = None
        self.transcript.clear()
        self.status = Status(AWAITING_UPLOAD, "warning")
