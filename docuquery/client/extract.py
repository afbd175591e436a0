# Extract readable text from an uploaded document.
#
# Supported:
# - .pdf                (pdfminer.six, pages separated by a blank line)
# - .docx               (python-docx, paragraphs + table rows)
# - .txt / text/*       (UTF-8, invalid bytes ignored)
#
# .pptx is accepted by the upload check but has no extractor; it is
# rejected with a message instead of failing silently.

from __future__ import annotations
import io
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Optional imports guarded inside functions
# pdfminer.six, python-docx

ACCEPTED_EXTS = {".pdf", ".docx", ".txt", ".pptx"}

PDF_MIME = "application/pdf"
DOCX_MIME_MARKER = "officedocument.wordprocessingml"
PPTX_MIME_MARKER = "officedocument.presentationml"

SUPPORTED_HINT = "Please use PDF, DOCX, or TXT."


class ExtractionError(Exception):
    """Base class for anything that stops a document from being loaded."""


class UnsupportedFileTypeError(ExtractionError):
    pass


class PresentationNotSupportedError(UnsupportedFileTypeError):
    pass


class EmptyExtractionError(ExtractionError):
    pass


@dataclass
class ExtractedDocument:
    file_name: str
    file_type: str
    text: str


def _extract_pdf(data: bytes) -> str:
    from pdfminer.high_level import extract_text
    raw = extract_text(io.BytesIO(data))
    # pdfminer ends every page with a form feed
    pages = [p.strip() for p in raw.split("\f")]
    return "\n\n".join(p for p in pages if p)


def _extract_docx(data: bytes) -> str:
    from docx import Document  # python-docx
    doc = Document(io.BytesIO(data))
    parts = [para.text for para in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            parts.append("\t".join(cell.text for cell in row.cells))
    return "\n".join(parts)


def _extract_txt(data: bytes) -> str:
    return data.decode("utf-8", errors="ignore")


def guess_mime_type(file_name: str) -> str:
    mime, _ = mimetypes.guess_type(file_name)
    return mime or ""


def check_extension(file_name: str) -> str:
    """Upload-time check on the extension alone; returns it lowercased."""
    ext = Path(file_name).suffix.lower()
    if ext not in ACCEPTED_EXTS:
        raise UnsupportedFileTypeError(f"Unsupported file type: {ext}. {SUPPORTED_HINT}")
    return ext


def extract_document(file_name: str, data: bytes, mime_type: Optional[str] = None) -> ExtractedDocument:
    name = file_name.lower()
    mime = mime_type if mime_type is not None else guess_mime_type(file_name)

    if name.endswith(".pptx") or PPTX_MIME_MARKER in mime:
        raise PresentationNotSupportedError(
            f"PPTX files are currently not supported for extraction. {SUPPORTED_HINT}"
        )

    if mime == PDF_MIME or name.endswith(".pdf"):
        file_type, extractor = "PDF", _extract_pdf
    elif DOCX_MIME_MARKER in mime or name.endswith(".docx"):
        file_type, extractor = "DOCX", _extract_docx
    elif mime.startswith("text/") or name.endswith(".txt"):
        file_type, extractor = "TXT", _extract_txt
    else:
        raise UnsupportedFileTypeError(f"Unsupported file type: {mime}. {SUPPORTED_HINT}")

    try:
        text = extractor(data)
    except Exception as e:
        raise ExtractionError(str(e) or type(e).__name__) from e

    if not text or not text.strip():
        raise EmptyExtractionError(f"Extraction failed: No readable text found in {file_type}.")

    return ExtractedDocument(file_name=file_name, file_type=file_type, text=text)


def extract_path(path: str) -> ExtractedDocument:
    p = Path(path)
    check_extension(p.name)
    return extract_document(p.name, p.read_bytes())
