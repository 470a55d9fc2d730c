"""
Microdata Extractor

Converts HTML Microdata markup into a JSON-LD document:
- Finds top-level items (itemscope without itemprop)
- Resolves nested items and property values
- Merges repeated properties into ordered lists
"""

import logging
from collections import deque
from typing import List, Optional, Union

from bs4 import BeautifulSoup, Tag

from microdata_jsonld.config import Config
from microdata_jsonld.constants import (
    CONTEXT_KEY,
    GRAPH_KEY,
    ITEMPROP_ATTR,
    ITEMSCOPE_ATTR,
    ITEMTYPE_ATTR,
    SCHEMA_ORG_CONTEXT,
    SCHEMA_ORG_PREFIX_PATTERN,
    TYPE_KEY,
    VALUE_ATTRIBUTE_BY_TAG,
)
from microdata_jsonld.models import Item, PropertyValue

logger = logging.getLogger(__name__)


def strip_schema_prefix(itemtype: str) -> Union[str, List[str]]:
    """Turn an itemtype declaration into a bare schema.org type.

    e.g. "https://schema.org/Product" -> "Product"

    An itemtype listing several URLs yields a list of bare types.
    """
    types = [
        SCHEMA_ORG_PREFIX_PATTERN.sub('', t)
        for t in itemtype.split()
    ]
    types = [t for t in types if t]
    if len(types) == 1:
        return types[0]
    return types


class MicrodataExtractor:
    """Extract Microdata items from a parsed HTML document."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize the extractor.

        Args:
            config: Settings used when parsing raw HTML (defaults from env)
        """
        self.config = config or Config.from_env()

    def extract_from_html(self, html: str) -> Item:
        """
        Parse raw HTML and extract its Microdata.

        Args:
            html: HTML source, possibly malformed

        Returns:
            JSON-LD document, or an empty dict when no items are found
        """
        soup = BeautifulSoup(html, self.config.html_parser)
        return self.extract(soup)

    def extract(self, root: Tag) -> Item:
        """
        Build a JSON-LD document from every top-level item under ``root``.

        Args:
            root: BeautifulSoup document or element

        Returns:
            Empty dict for no items, a flat document for a single item, or a
            document with an @graph list for several items
        """
        items = [self.parse_item(element) for element in self.find_item_roots(root)]

        if not items:
            logger.debug("No Microdata items found")
            return {}

        logger.debug(f"Extracted {len(items)} top-level Microdata item(s)")

        if len(items) == 1:
            document = {CONTEXT_KEY: SCHEMA_ORG_CONTEXT}
            document.update(items[0])
            return document

        return {CONTEXT_KEY: SCHEMA_ORG_CONTEXT, GRAPH_KEY: items}

    def find_item_roots(self, root: Tag) -> List[Tag]:
        """Find elements that start an item without being a property value.

        ``root`` itself counts when it is such an element.
        """
        candidates = [root] if isinstance(root, Tag) and root.has_attr(ITEMSCOPE_ATTR) else []
        candidates.extend(root.find_all(attrs={ITEMSCOPE_ATTR: True}))
        return [
            element
            for element in candidates
            if not element.has_attr(ITEMPROP_ATTR)
        ]

    def parse_item(self, element: Tag) -> Item:
        """
        Convert one itemscope element into an item dictionary.

        Args:
            element: Element carrying the itemscope attribute

        Returns:
            Item with @type (when declared) and its resolved properties
        """
        item: Item = {}

        itemtype = element.get(ITEMTYPE_ATTR)
        if itemtype:
            schema_type = strip_schema_prefix(itemtype)
            if schema_type:
                item[TYPE_KEY] = schema_type

        for prop_element in self._get_child_properties(element):
            prop_names = self._get_property_names(prop_element)
            prop_value = self.get_property_value(prop_element)

            for prop_name in prop_names:
                self._merge_property(item, prop_name, prop_value)

        return item

    def _get_child_properties(self, element: Tag) -> List[Tag]:
        """Collect itemprop elements breadth-first, stopping at nested scopes."""
        properties = []
        queue = deque(child for child in element.children if isinstance(child, Tag))

        while queue:
            node = queue.popleft()
            if node.has_attr(ITEMPROP_ATTR):
                properties.append(node)

            # Properties inside a nested item belong to that item
            if not node.has_attr(ITEMSCOPE_ATTR):
                queue.extend(child for child in node.children if isinstance(child, Tag))

        return properties

    @staticmethod
    def _get_property_names(element: Tag) -> List[str]:
        itemprop = element.get(ITEMPROP_ATTR, '')
        # bs4 may hand back multi-valued attributes as a list
        if isinstance(itemprop, list):
            itemprop = ' '.join(itemprop)
        return itemprop.split()

    def get_property_value(self, element: Tag) -> PropertyValue:
        """
        Resolve the value of a property element.

        Nested items are parsed recursively; known tags read their value
        attribute; everything else uses its stripped text.
        """
        if element.has_attr(ITEMSCOPE_ATTR):
            return self.parse_item(element)

        attribute = VALUE_ATTRIBUTE_BY_TAG.get(element.name.lower())
        if attribute:
            value = element.get(attribute, '')
            if isinstance(value, list):
                value = ' '.join(value)
            return value

        return element.get_text().strip()

    @staticmethod
    def _merge_property(item: Item, name: str, value: PropertyValue) -> None:
        """Add a value to an item, turning repeated properties into lists."""
        # Empty strings are dropped, "0" is a real value
        if not isinstance(value, (dict, list)) and str(value).strip() == '':
            return

        if name not in item:
            item[name] = value
            return

        if not isinstance(item[name], list):
            item[name] = [item[name]]
        item[name].append(value)
