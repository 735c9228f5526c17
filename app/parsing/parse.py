from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .models import ParsedResume

logger = logging.getLogger(__name__)

_PDF_MAGIC = b"%PDF"
_ZIP_MAGIC = b"PK\x03\x04"


class UnsupportedDocumentError(ValueError):
    pass


def _parse_txt(content: bytes) -> tuple[str, list[str]]:
    for encoding in ("utf-8", "utf-16"):
        try:
            return content.decode(encoding), []
        except UnicodeDecodeError:
            continue
    return content.decode("latin-1"), ["Text decoded as latin-1."]


def _parse_pdf(content: bytes) -> tuple[str, list[str]]:
    warnings: list[str] = []
    if not content.startswith(_PDF_MAGIC):
        warnings.append("File does not carry a PDF signature.")
        return "", warnings

    try:
        reader = PdfReader(BytesIO(content))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
    except (PdfReadError, ValueError, KeyError) as exc:
        logger.warning("pdf_parse_failed error=%s", exc)
        warnings.append(f"PDF parsing failed: {exc}")
        return "", warnings

    text_parts = [page_text for page_text in pages if page_text]
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    elif len(text_parts) < len(pages):
        warnings.append(f"{len(pages) - len(text_parts)} of {len(pages)} PDF pages had no extractable text.")
    return "\n".join(text_parts), warnings


def _parse_docx(content: bytes) -> tuple[str, list[str]]:
    warnings: list[str] = []
    if not content.startswith(_ZIP_MAGIC):
        warnings.append("File does not carry a DOCX signature.")
        return "", warnings

    try:
        document = Document(BytesIO(content))
    except (PackageNotFoundError, BadZipFile, ValueError, KeyError) as exc:
        logger.warning("docx_parse_failed error=%s", exc)
        warnings.append(f"DOCX parsing failed: {exc}")
        return "", warnings

    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), warnings


_PARSERS = {
    ".txt": ("txt", _parse_txt),
    ".pdf": ("pdf", _parse_pdf),
    ".docx": ("docx", _parse_docx),
}


def parse_upload(filename: str, content: bytes) -> ParsedResume:
    """Extract plain text from an uploaded résumé held in memory."""
    extension = Path(filename or "").suffix.lower()
    if extension not in _PARSERS:
        raise UnsupportedDocumentError(
            f"Unsupported file type '{extension or filename}'. Supported types: .pdf, .docx, .txt"
        )

    source_type, parser = _PARSERS[extension]
    text, warnings = parser(content)
    return ParsedResume(
        source_type=source_type,
        filename=filename,
        text=text,
        parsing_warnings=warnings,
    )
