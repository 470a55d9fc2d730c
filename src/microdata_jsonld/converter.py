"""
Microdata Converter

Runs the full pipeline on caller-supplied content:
HTML -> Microdata extraction -> JSON-LD document -> optional validation.
Fetching pages and storing results stay with the caller.
"""

import json
import logging
from typing import Any, List, Optional

from microdata_jsonld.config import Config
from microdata_jsonld.constants import (
    CONTEXT_KEY,
    HTML_TAG_PATTERN,
    JSON_LD_SCRIPT_TEMPLATE,
    SCHEMA_ORG_CONTEXT,
    WHITESPACE_PATTERN,
)
from microdata_jsonld.extractor import MicrodataExtractor
from microdata_jsonld.models import ConversionResult, Finding, Item
from microdata_jsonld.validator import SchemaValidator, load_json_ld

logger = logging.getLogger(__name__)

MESSAGE_SUCCESS = "Success"
MESSAGE_EMPTY_CONTENT = "Fetched page content is empty."
MESSAGE_NO_MICRODATA = "No microdata found."


def sanitize_text(text: str) -> str:
    """Strip HTML tags and collapse whitespace in a string."""
    text = HTML_TAG_PATTERN.sub('', text)
    return WHITESPACE_PATTERN.sub(' ', text).strip()


def sanitize_json(data: Any) -> Any:
    """Return a copy of ``data`` with every string value sanitized.

    Keys are left untouched; non-string scalars pass through. Nested
    containers are copied from a worklist, so depth is not bounded by the
    interpreter's recursion limit.
    """
    if not isinstance(data, (dict, list)):
        return sanitize_text(data) if isinstance(data, str) else data

    result = {} if isinstance(data, dict) else []
    stack = [(data, result)]

    while stack:
        source, target = stack.pop()
        entries = source.items() if isinstance(source, dict) else enumerate(source)

        for key, value in entries:
            if isinstance(value, (dict, list)):
                copied = {} if isinstance(value, dict) else []
                stack.append((value, copied))
            elif isinstance(value, str):
                copied = sanitize_text(value)
            else:
                copied = value

            if isinstance(target, dict):
                target[key] = copied
            else:
                target.append(copied)

    return result


def ensure_context(document: Item) -> Item:
    """Return the document with @context first, adding it when missing."""
    if CONTEXT_KEY in document:
        return document
    with_context = {CONTEXT_KEY: SCHEMA_ORG_CONTEXT}
    with_context.update(document)
    return with_context


def render_script_tag(document: Item) -> str:
    """Render a document as an embeddable JSON-LD script tag.

    Returns an empty string for an empty document.
    """
    if not document:
        return ""
    payload = json.dumps(ensure_context(document), ensure_ascii=False)
    # Keep a literal "</script>" inside a string from closing the tag
    payload = payload.replace('</', '<\\/')
    return JSON_LD_SCRIPT_TEMPLATE.format(payload=payload)


class MicrodataConverter:
    """Convert HTML pages to JSON-LD and check the result."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize the converter.

        Args:
            config: Converter settings (defaults from environment)
        """
        self.config = config or Config.from_env()
        self.extractor = MicrodataExtractor(self.config)
        self.validator = SchemaValidator()

    def convert(self, html: str, source: Optional[str] = None) -> ConversionResult:
        """
        Convert an HTML page into a JSON-LD document.

        Args:
            html: Page HTML
            source: Optional label (file name or URL) for logs and reports

        Returns:
            ConversionResult; ``success`` is False when the page is empty or
            carries no Microdata
        """
        label = source or "<html>"

        if not html or not html.strip():
            logger.warning(f"{label}: {MESSAGE_EMPTY_CONTENT}")
            return ConversionResult(False, MESSAGE_EMPTY_CONTENT, source=source)

        document = self.extractor.extract_from_html(html)
        if not document:
            logger.info(f"{label}: {MESSAGE_NO_MICRODATA}")
            return ConversionResult(False, MESSAGE_NO_MICRODATA, source=source)

        logger.info(f"{label}: converted Microdata to JSON-LD")
        return ConversionResult(True, MESSAGE_SUCCESS, json_ld=document, source=source)

    def check(self, html: str, source: Optional[str] = None) -> ConversionResult:
        """Convert a page and validate the resulting document."""
        result = self.convert(html, source=source)
        if result.success:
            result.findings = self.validate(result.json_ld)
            logger.info(
                f"{source or '<html>'}: {len(result.warnings)} warning(s), "
                f"{len(result.suggestions)} suggestion(s)"
            )
        return result

    def validate(self, data: Any) -> List[Finding]:
        """Validate a JSON-LD document, sanitizing strings first if configured."""
        if self.config.sanitize:
            data = sanitize_json(data)
        return self.validator.validate(data)

    def validate_json(self, text: str) -> List[Finding]:
        """
        Parse and validate JSON-LD text.

        Raises:
            InvalidJSONError: If the text is not valid JSON
        """
        return self.validate(load_json_ld(text))
