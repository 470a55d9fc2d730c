# src/microdata_jsonld/constants.py
"""Centralized constants for the Microdata to JSON-LD converter.

Attribute names, tag-to-attribute lookups and the fixed strings that appear
in generated documents. For user-configurable values, see config.py.
"""

import re

# =============================================================================
# JSON-LD Constants
# =============================================================================

# Value written to @context on every generated document
SCHEMA_ORG_CONTEXT = "https://schema.org"

# Matches the schema.org vocabulary prefix of an itemtype URL
# e.g. "http://schema.org/Product", "https://Schema.org/Product"
SCHEMA_ORG_PREFIX_PATTERN = re.compile(r"https?://schema\.org/?", re.IGNORECASE)

CONTEXT_KEY = "@context"
GRAPH_KEY = "@graph"
TYPE_KEY = "@type"


# =============================================================================
# Microdata Attributes
# =============================================================================

ITEMSCOPE_ATTR = "itemscope"
ITEMPROP_ATTR = "itemprop"
ITEMTYPE_ATTR = "itemtype"


# =============================================================================
# Property Value Resolution
# =============================================================================

# Tag name -> attribute holding the property value.
# Any tag not listed here resolves to its stripped text content.
VALUE_ATTRIBUTE_BY_TAG = {
    # Links
    'a': 'href',
    'link': 'href',
    # Embedded media
    'img': 'src',
    'video': 'src',
    'audio': 'src',
    'source': 'src',
    # Metadata
    'meta': 'content',
    'time': 'datetime',
    # Form values
    'data': 'value',
    'input': 'value',
}


# =============================================================================
# Validation Constants
# =============================================================================

# Type-check sentinel: a plain string (link) is an acceptable value
URL_SENTINEL = "URL"


# =============================================================================
# Output Constants
# =============================================================================

# Script tag used when embedding a document in a page
JSON_LD_SCRIPT_TEMPLATE = '<script type="application/ld+json">{payload}</script>'

# Matches HTML tags inside string values during sanitization
HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

# Runs of whitespace (including line breaks and tabs)
WHITESPACE_PATTERN = re.compile(r"\s+")
