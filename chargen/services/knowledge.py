"""
Knowledge extraction from uploaded documents.

Text files and PDFs are split into sentences, each becoming one knowledge entry.
A file that cannot be read is logged and skipped; it never fails the batch.
"""

from __future__ import annotations

__all__ = [
    "UploadedDocument",
    "split_sentences",
    "is_text_file",
    "is_pdf_file",
    "extract_pdf_text",
    "extract_document_knowledge",
    "extract_knowledge",
]

import io
import logging
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable, Optional

from pypdf import PdfReader

from chargen.domain import PDF_CONTENT_TYPE, TEXT_FILE_EXTENSIONS

logger = logging.getLogger(__name__)

_SENTENCE_END_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class UploadedDocument:
    filename: str
    content_type: Optional[str]
    content: bytes


def split_sentences(text: str) -> list[str]:
    """Split on runs of . ! ? and return period-terminated sentences; list items ("- ...") are dropped."""
    out: list[str] = []
    for part in _SENTENCE_END_RE.split(text or ""):
        sentence = part.strip()
        if not sentence or sentence.startswith("-"):
            continue
        out.append(sentence + ".")
    return out


def _extension(filename: str) -> str:
    return PurePath(filename or "").suffix.lower()


def is_text_file(filename: str) -> bool:
    return _extension(filename) in TEXT_FILE_EXTENSIONS


def is_pdf_file(filename: str, content_type: Optional[str] = None) -> bool:
    return content_type == PDF_CONTENT_TYPE or _extension(filename) == ".pdf"


def extract_pdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    pages: list[str] = []
    for page in reader.pages:
        page_text = (page.extract_text() or "").strip()
        if page_text:
            pages.append(page_text)
    return "\n\n".join(pages)


def extract_document_knowledge(doc: UploadedDocument) -> list[str]:
    """Sentences of one document; [] for unsupported file types."""
    if is_pdf_file(doc.filename, doc.content_type):
        return split_sentences(extract_pdf_text(doc.content))
    if is_text_file(doc.filename):
        return split_sentences(doc.content.decode("utf-8", errors="replace"))
    logger.info("extract_knowledge: skipping unsupported file %s (%s)", doc.filename, doc.content_type)
    return []


def extract_knowledge(docs: Iterable[UploadedDocument]) -> list[str]:
    knowledge: list[str] = []
    for doc in docs:
        try:
            sentences = extract_document_knowledge(doc)
        except Exception as e:  # noqa: BLE001
            logger.warning("extract_knowledge: failed to process %s: %s", doc.filename, e)
            continue
        logger.debug("extract_knowledge: %s -> %d sentences", doc.filename, len(sentences))
        knowledge.extend(sentences)
    return knowledge
