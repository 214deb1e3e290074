#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Document Extractor - best-effort plain text from uploaded documents.

Supported locally:
- .txt   raw decoded text
- .html  visible text of the parsed tree (tree kept for reconstruction)
- .docx  paragraph text, formatting discarded

Page/slide formats (.pdf, .pptx, .ppt) are provider-only and rejected
immediately with ProviderOnlyError.

Usage:
    from core.extractor import DocumentExtractor

    content = DocumentExtractor().extract(data, DocumentFormat.HTML)
    print(content.text)
"""

from io import BytesIO
from typing import List

from bs4 import BeautifulSoup
from docx import Document

from config.logging_config import get_logger
from .exceptions import ExtractionError, ProviderOnlyError
from .models import DocumentFormat, ExtractedContent

logger = get_logger(__name__)


def decode_text(data: bytes) -> str:
    """UTF-8 decode tolerating a BOM; undecodable bytes are replaced."""
    return data.decode("utf-8-sig", errors="replace")


class DocumentExtractor:
    """Convert a document into plain text for text-based translation"""

    def extract(self, data: bytes, declared_format: DocumentFormat) -> ExtractedContent:
        """
        Extract plain text from document bytes.

        Raises:
            ProviderOnlyError: format can only be handled by the document provider.
            ExtractionError: the content could not be decoded or parsed.
        """
        if declared_format.is_paged:
            raise ProviderOnlyError(
                f"{declared_format.value} files can only be translated by the document provider."
            )

        if declared_format == DocumentFormat.TXT:
            return ExtractedContent(text=decode_text(data), declared_format=declared_format)

        if declared_format == DocumentFormat.HTML:
            return self._extract_html(data)

        if declared_format.is_word_processor:
            return self._extract_docx(data, declared_format)

        raise ExtractionError(f"No extractor for {declared_format.value}")

    def _extract_html(self, data: bytes) -> ExtractedContent:
        try:
            tree = BeautifulSoup(decode_text(data), "html.parser")
        except Exception as e:
            raise ExtractionError(f"HTML parsing error: {e}") from e

        text = tree.get_text().strip()
        logger.debug(f" Extracted {len(text)} chars from HTML")
        return ExtractedContent(text=text, declared_format=DocumentFormat.HTML, tree=tree)

    def _extract_docx(self, data: bytes, declared_format: DocumentFormat) -> ExtractedContent:
        try:
            document = Document(BytesIO(data))
        except Exception as e:
            # Legacy binary .doc files land here as well
            logger.warning(f" Cannot open word-processor container: {type(e).__name__}: {e}")
            raise ExtractionError(
                f"Cannot read {declared_format.value} file: the document is corrupt or not a .docx container"
            ) from e

        paragraphs: List[str] = [p.text for p in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                for cell in row.cells:
                    paragraphs.extend(p.text for p in cell.paragraphs)

        text = "\n\n".join(p for p in paragraphs if p.strip())
        logger.debug(f" Extracted {len(text)} chars from {declared_format.value}")
        return ExtractedContent(text=text, declared_format=declared_format)
