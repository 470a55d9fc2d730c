# tests/test_extractor.py
"""Tests for the Microdata extractor."""

import pytest
from bs4 import BeautifulSoup

from microdata_jsonld.config import Config
from microdata_jsonld.constants import SCHEMA_ORG_CONTEXT
from microdata_jsonld.extractor import MicrodataExtractor, strip_schema_prefix


def _soup(html):
    return BeautifulSoup(html, 'lxml')


class TestStripSchemaPrefix:
    """Tests for itemtype normalization."""

    @pytest.mark.parametrize("itemtype", [
        "https://schema.org/Product",
        "http://schema.org/Product",
        "HTTPS://Schema.org/Product",
        "https://schema.orgProduct",
    ])
    def test_prefix_variants(self, itemtype):
        """Test that http/https and case variants are removed."""
        assert strip_schema_prefix(itemtype) == "Product"

    def test_foreign_vocabulary_kept(self):
        """Test that non-schema.org types are left alone."""
        assert strip_schema_prefix("https://example.org/Widget") == "https://example.org/Widget"

    def test_multiple_types(self):
        """Test that several itemtype URLs give a list of bare types."""
        result = strip_schema_prefix("https://schema.org/Product https://schema.org/Vehicle")
        assert result == ["Product", "Vehicle"]

    def test_bare_vocabulary_is_empty(self):
        """Test that the vocabulary URL alone has no type."""
        assert strip_schema_prefix("https://schema.org/") == []


class TestMicrodataExtractor:
    """Test suite for MicrodataExtractor."""

    @pytest.fixture
    def extractor(self):
        """Create a MicrodataExtractor instance."""
        return MicrodataExtractor(Config())

    @pytest.fixture
    def product_html(self):
        """A product page with a nested offer."""
        return """
        <!DOCTYPE html>
        <html lang="en">
        <head><title>Widget</title></head>
        <body>
            <div itemscope itemtype="https://schema.org/Product">
                <h1 itemprop="name">Widget</h1>
                <img itemprop="image" src="https://example.com/widget.jpg" alt="Widget">
                <p itemprop="description">A  <b>very</b> useful widget.</p>
                <div itemprop="offers" itemscope itemtype="http://schema.org/Offer">
                    <span itemprop="price">19.99</span>
                    <meta itemprop="priceCurrency" content="USD">
                    <link itemprop="availability" href="https://schema.org/InStock">
                </div>
            </div>
        </body>
        </html>
        """

    def test_single_root_document(self, extractor, product_html):
        """Test that one item yields a flat document with @context first."""
        document = extractor.extract(_soup(product_html))

        assert list(document.keys())[0] == "@context"
        assert document["@context"] == SCHEMA_ORG_CONTEXT
        assert document["@type"] == "Product"
        assert document["name"] == "Widget"
        assert document["image"] == "https://example.com/widget.jpg"
        assert document["description"] == "A  very useful widget."
        assert "@graph" not in document

    def test_nested_item(self, extractor, product_html):
        """Test that a nested itemscope becomes a nested object."""
        document = extractor.extract(_soup(product_html))

        assert document["offers"] == {
            "@type": "Offer",
            "price": "19.99",
            "priceCurrency": "USD",
            "availability": "https://schema.org/InStock",
        }

    def test_scope_boundary(self, extractor, product_html):
        """Test that a nested item's properties stay with the nested item."""
        document = extractor.extract(_soup(product_html))

        assert "price" not in document
        assert "priceCurrency" not in document
        assert "availability" not in document

    def test_no_items(self, extractor):
        """Test that a page without Microdata gives an empty result."""
        html = "<html><body><p itemprop='name'>Orphan</p></body></html>"
        assert extractor.extract(_soup(html)) == {}

    def test_multiple_roots_use_graph(self, extractor):
        """Test that several top-level items are placed in @graph."""
        html = """
        <div itemscope itemtype="https://schema.org/Person"><span itemprop="name">Jane</span></div>
        <div itemscope itemtype="https://schema.org/Organization"><span itemprop="name">Acme</span></div>
        """
        document = extractor.extract(_soup(html))

        assert list(document.keys()) == ["@context", "@graph"]
        assert document["@graph"] == [
            {"@type": "Person", "name": "Jane"},
            {"@type": "Organization", "name": "Acme"},
        ]

    def test_scope_without_itemprop_is_separate_root(self, extractor):
        """Test that an itemscope nested without itemprop is its own root."""
        html = """
        <div itemscope itemtype="https://schema.org/WebPage">
            <span itemprop="name">Home</span>
            <div itemscope itemtype="https://schema.org/Person">
                <span itemprop="name">Jane</span>
            </div>
        </div>
        """
        document = extractor.extract(_soup(html))

        assert document["@graph"] == [
            {"@type": "WebPage", "name": "Home"},
            {"@type": "Person", "name": "Jane"},
        ]

    def test_single_property_is_scalar(self, extractor):
        """Test that one occurrence is stored as a bare value."""
        html = """
        <div itemscope itemtype="https://schema.org/Product">
            <span itemprop="category">Tools</span>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert document["category"] == "Tools"

    def test_repeated_property_is_list(self, extractor):
        """Test that repeated properties become an ordered list."""
        html = """
        <div itemscope itemtype="https://schema.org/Product">
            <span itemprop="category">Tools</span>
            <span itemprop="category">Hardware</span>
            <span itemprop="category">Garden</span>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert document["category"] == ["Tools", "Hardware", "Garden"]

    def test_repeated_nested_items_are_list(self, extractor):
        """Test that repeated nested items become a list of objects."""
        html = """
        <div itemscope itemtype="https://schema.org/Recipe">
            <div itemprop="author" itemscope itemtype="https://schema.org/Person">
                <span itemprop="name">Jane</span>
            </div>
            <div itemprop="author" itemscope itemtype="https://schema.org/Person">
                <span itemprop="name">John</span>
            </div>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert document["author"] == [
            {"@type": "Person", "name": "Jane"},
            {"@type": "Person", "name": "John"},
        ]

    def test_breadth_first_order(self, extractor):
        """Test that shallower properties are collected before deeper ones."""
        html = """
        <div itemscope itemtype="https://schema.org/Thing">
            <div><span itemprop="keywords">deep</span></div>
            <span itemprop="keywords">shallow</span>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert document["keywords"] == ["shallow", "deep"]

    def test_multiple_property_names(self, extractor):
        """Test that each name in a multi-valued itemprop gets the value."""
        html = """
        <div itemscope itemtype="https://schema.org/Product">
            <span itemprop="name alternateName">Widget</span>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert document["name"] == "Widget"
        assert document["alternateName"] == "Widget"

    def test_zero_value_preserved(self, extractor):
        """Test that a "0" value is kept and blank values are dropped."""
        html = """
        <div itemscope itemtype="https://schema.org/Offer">
            <span itemprop="price">0</span>
            <span itemprop="description">   </span>
            <meta itemprop="priceCurrency" content="">
        </div>
        """
        document = extractor.extract(_soup(html))

        assert document["price"] == "0"
        assert "description" not in document
        assert "priceCurrency" not in document

    def test_blank_value_does_not_start_list(self, extractor):
        """Test that a skipped blank value does not affect list building."""
        html = """
        <div itemscope itemtype="https://schema.org/Product">
            <span itemprop="color">Red</span>
            <span itemprop="color"> </span>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert document["color"] == "Red"

    def test_tag_specific_values(self, extractor):
        """Test attribute-based value resolution per tag."""
        html = """
        <div itemscope itemtype="https://schema.org/Event">
            <a itemprop="url" href="https://example.com/event">Event page</a>
            <time itemprop="startDate" datetime="2024-05-01T19:00">May 1st</time>
            <data itemprop="maximumAttendeeCapacity" value="250">Two hundred fifty</data>
            <input itemprop="eventStatus" value="EventScheduled">
            <video itemprop="video" src="https://example.com/teaser.mp4"></video>
            <audio itemprop="audio" src="https://example.com/teaser.mp3"></audio>
            <span itemprop="name">  Spring Gala  </span>
        </div>
        """
        document = extractor.extract(_soup(html))

        assert document["url"] == "https://example.com/event"
        assert document["startDate"] == "2024-05-01T19:00"
        assert document["maximumAttendeeCapacity"] == "250"
        assert document["eventStatus"] == "EventScheduled"
        assert document["video"] == "https://example.com/teaser.mp4"
        assert document["audio"] == "https://example.com/teaser.mp3"
        assert document["name"] == "Spring Gala"

    def test_missing_value_attribute_is_dropped(self, extractor):
        """Test that a tag without its value attribute yields no property."""
        html = """
        <div itemscope itemtype="https://schema.org/Event">
            <time itemprop="startDate">May 1st</time>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert "startDate" not in document

    def test_itemscope_wins_over_attributes(self, extractor):
        """Test that a property element with itemscope is parsed as an item."""
        html = """
        <div itemscope itemtype="https://schema.org/Article">
            <a itemprop="author" href="https://example.com/jane" itemscope itemtype="https://schema.org/Person">
                <span itemprop="name">Jane</span>
            </a>
        </div>
        """
        document = extractor.extract(_soup(html))
        assert document["author"] == {"@type": "Person", "name": "Jane"}

    def test_missing_itemtype(self, extractor):
        """Test that an item without itemtype has no @type key."""
        html = '<div itemscope><span itemprop="name">Untyped</span></div>'
        document = extractor.extract(_soup(html))
        assert document == {"@context": SCHEMA_ORG_CONTEXT, "name": "Untyped"}

    def test_malformed_html(self, extractor):
        """Test that unclosed markup still yields a best-effort result."""
        html = '<div itemscope itemtype="https://schema.org/Person"><span itemprop="name">Jane'
        document = extractor.extract_from_html(html)
        assert document["@type"] == "Person"
        assert document["name"] == "Jane"

    def test_idempotent(self, extractor, product_html):
        """Test that extracting twice gives identical documents."""
        soup = _soup(product_html)
        assert extractor.extract(soup) == extractor.extract(soup)

    def test_extract_from_html_matches_extract(self, extractor, product_html):
        """Test that the HTML entry point parses and extracts."""
        assert extractor.extract_from_html(product_html) == extractor.extract(_soup(product_html))

    def test_html_parser_from_config(self):
        """Test that the configured tree builder is used."""
        extractor = MicrodataExtractor(Config(html_parser="html.parser"))
        html = '<div itemscope itemtype="https://schema.org/Person"><span itemprop="name">Jane</span></div>'
        assert extractor.extract_from_html(html)["name"] == "Jane"

    def test_extract_from_item_element(self, extractor):
        """Test that an item element passed directly is its own root."""
        html = """
        <div id="card" itemscope itemtype="https://schema.org/Person">
            <span itemprop="name">Jane</span>
        </div>
        """
        element = _soup(html).find(id="card")

        assert extractor.extract(element) == {
            "@context": SCHEMA_ORG_CONTEXT,
            "@type": "Person",
            "name": "Jane",
        }

    def test_extract_from_item_element_with_nested_root(self, extractor):
        """Test that the passed element comes before roots found inside it."""
        html = """
        <section id="page" itemscope itemtype="https://schema.org/WebPage">
            <span itemprop="name">Team</span>
            <div itemscope itemtype="https://schema.org/Person">
                <span itemprop="name">Jane</span>
            </div>
        </section>
        """
        element = _soup(html).find(id="page")

        assert extractor.extract(element)["@graph"] == [
            {"@type": "WebPage", "name": "Team"},
            {"@type": "Person", "name": "Jane"},
        ]

    def test_extract_from_property_element(self, extractor):
        """Test that a property-valued item passed directly is not a root."""
        html = """
        <div itemscope itemtype="https://schema.org/Product">
            <div id="offer" itemprop="offers" itemscope itemtype="https://schema.org/Offer">
                <span itemprop="price">5</span>
            </div>
        </div>
        """
        element = _soup(html).find(id="offer")
        assert extractor.extract(element) == {}
