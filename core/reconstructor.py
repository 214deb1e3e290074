#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Document Reconstructor - translated plain text back into a deliverable file.

- TXT   text verbatim
- DOCX  one paragraph per non-blank line (python-docx)
- PDF   word-wrapped, fixed-pitch lines paginated on A4 (ReportLab)
- HTML  positional substitution into the original tree (heuristic, see
        HtmlSubstitution) with a regenerated minimal page as fallback

Anything else is emitted as plain text.
"""

import html
import re
from io import BytesIO
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString
from docx import Document
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from config.constants import (
    PDF_COLUMN_WIDTH_MM,
    PDF_LEFT_MARGIN_MM,
    PDF_FIRST_LINE_MM,
    PDF_LINE_HEIGHT_MM,
    PDF_PAGE_LIMIT_MM,
    PDF_FONT_SIZE,
)
from config.logging_config import get_logger
from .models import DocumentFormat, ExtractedContent

logger = get_logger(__name__)


# Unicode fonts with Vietnamese coverage, first existing one wins
UNICODE_FONT_CANDIDATES = [
    '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
    '/usr/share/fonts/dejavu/DejaVuSans.ttf',
    '/usr/share/fonts/liberation/LiberationSans-Regular.ttf',
    '/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf',
    '/System/Library/Fonts/Supplemental/Arial.ttf',
]
UNICODE_FONT_NAME = 'HubSans'
DEFAULT_FONT_NAME = 'Helvetica'


def sanitize_for_xml(text: str) -> str:
    """
    Remove NULL bytes and control characters python-docx refuses to serialize.

    Tab, newline and carriage return are kept.
    """
    if not text:
        return text
    text = text.replace('\x00', '')
    return re.sub(r'[\x01-\x08\x0B-\x0C\x0E-\x1F\x7F]', '', text)


def split_paragraphs(text: str) -> List[str]:
    """Blank-line separated paragraph units, empty ones dropped."""
    normalized = text.replace('\r\n', '\n')
    return [p for p in normalized.split('\n\n') if p.strip()]


def split_lines(text: str) -> List[str]:
    """Non-blank lines"""
    return [line for line in text.replace('\r\n', '\n').split('\n') if line.strip()]


def paginate(lines: List[str]) -> List[List[str]]:
    """
    Assign wrapped lines to pages.

    The cursor starts at PDF_FIRST_LINE_MM and advances PDF_LINE_HEIGHT_MM per
    line; a new page starts once it has passed PDF_PAGE_LIMIT_MM.
    """
    pages: List[List[str]] = [[]]
    y = PDF_FIRST_LINE_MM
    for line in lines:
        if y > PDF_PAGE_LIMIT_MM:
            pages.append([])
            y = PDF_FIRST_LINE_MM
        pages[-1].append(line)
        y += PDF_LINE_HEIGHT_MM
    return pages


def _resolve_pdf_font() -> str:
    if UNICODE_FONT_NAME in pdfmetrics.getRegisteredFontNames():
        return UNICODE_FONT_NAME
    for font_path in UNICODE_FONT_CANDIDATES:
        if Path(font_path).exists():
            try:
                pdfmetrics.registerFont(TTFont(UNICODE_FONT_NAME, font_path))
                return UNICODE_FONT_NAME
            except Exception as e:
                logger.warning(f" Could not register font {font_path}: {e}")
    return DEFAULT_FONT_NAME


class HtmlSubstitution:
    """
    Positional heuristic: the n-th non-blank text node of the original tree
    receives the n-th translated paragraph.

    Known limitation: alignment is by position, not meaning, so output
    misaligns when the node count differs from the paragraph count.
    """

    def __init__(self, tree: BeautifulSoup):
        self.tree = tree

    def text_nodes(self) -> List[NavigableString]:
        # Exact type match skips comments, doctype, script and style strings
        return [
            node for node in self.tree.find_all(string=True)
            if type(node) is NavigableString and node.strip()
        ]

    def apply(self, paragraphs: List[str]) -> str:
        nodes = self.text_nodes()
        for node, paragraph in zip(nodes, paragraphs):
            node.replace_with(paragraph)
        logger.debug(f" HTML substitution: {len(nodes)} nodes, {len(paragraphs)} paragraphs")
        return str(self.tree)


def minimal_html(text: str) -> str:
    """Generated page with one <p> per translated line"""
    body = ''.join(f'<p>{html.escape(line)}</p>' for line in split_lines(text))
    return (
        '<!DOCTYPE html>\n'
        '<html>\n'
        '<head>\n'
        '  <meta charset="UTF-8">\n'
        '  <title>Translated Document</title>\n'
        '</head>\n'
        f'<body>\n{body}\n</body>\n'
        '</html>\n'
    )


class DocumentReconstructor:
    """Build a file in the original format from translated text"""

    def reconstruct(
        self,
        translated_text: str,
        original_format: DocumentFormat,
        context: Optional[ExtractedContent] = None
    ) -> bytes:
        if original_format == DocumentFormat.TXT:
            return translated_text.encode('utf-8')
        if original_format.is_word_processor:
            return self.build_docx(translated_text)
        if original_format == DocumentFormat.PDF:
            return self.build_pdf(translated_text)
        if original_format == DocumentFormat.HTML:
            return self.build_html(translated_text, context)
        return translated_text.encode('utf-8')

    def build_docx(self, text: str) -> bytes:
        document = Document()
        for line in split_lines(text):
            document.add_paragraph(sanitize_for_xml(line))
        buffer = BytesIO()
        document.save(buffer)
        return buffer.getvalue()

    def build_pdf(self, text: str) -> bytes:
        font_name = _resolve_pdf_font()
        lines = simpleSplit(text, font_name, PDF_FONT_SIZE, PDF_COLUMN_WIDTH_MM * mm)

        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        page_height = A4[1]
        for page in paginate(lines):
            pdf.setFont(font_name, PDF_FONT_SIZE)
            y = PDF_FIRST_LINE_MM
            for line in page:
                pdf.drawString(PDF_LEFT_MARGIN_MM * mm, page_height - y * mm, line)
                y += PDF_LINE_HEIGHT_MM
            pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    def build_html(self, text: str, context: Optional[ExtractedContent]) -> bytes:
        try:
            if context is None or context.tree is None:
                raise ValueError("original HTML tree is not available")
            output = HtmlSubstitution(context.tree).apply(split_paragraphs(text))
        except Exception as e:
            logger.warning(f" HTML substitution failed, generating minimal page: {e}")
            output = minimal_html(text)
        return output.encode('utf-8')
