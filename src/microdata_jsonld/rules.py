"""Schema.org best-practice rule table.

Each rule lists the properties a type should carry and, for some properties,
the nested ``@type`` values that are acceptable. The sentinel ``URL`` in an
expected-type set allows a plain string (a link) instead of an object.

The table is read-only: it is built once at import time and exposed through
``MappingProxyType`` so validation runs can share it safely.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from microdata_jsonld.constants import URL_SENTINEL


@dataclass(frozen=True)
class SchemaRule:
    """Best-practice rule for one schema.org type."""

    recommended: Tuple[str, ...] = ()
    type_checks: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze whatever mapping the caller passed in
        object.__setattr__(
            self,
            'type_checks',
            MappingProxyType({k: tuple(v) for k, v in self.type_checks.items()}),
        )


def _rule(recommended, type_checks=None) -> SchemaRule:
    return SchemaRule(tuple(recommended), type_checks or {})


_ARTICLE_RULE = _rule(
    ['headline', 'image', 'author', 'datePublished', 'publisher'],
    {
        'author': ['Person', 'Organization'],
        'publisher': ['Organization'],
        'image': ['ImageObject', URL_SENTINEL],
    },
)

SCHEMA_RULES: Mapping[str, SchemaRule] = MappingProxyType({
    'Article': _ARTICLE_RULE,
    'NewsArticle': _ARTICLE_RULE,
    'Product': _rule(
        ['name', 'image', 'description', 'offers'],
        {
            'offers': ['Offer'],
            'brand': ['Brand', 'Organization'],
            'aggregateRating': ['AggregateRating'],
            'review': ['Review'],
        },
    ),
    # Usually nested under Product.offers
    'Offer': _rule(['price', 'priceCurrency', 'availability']),
    'Recipe': _rule(
        ['name', 'image', 'recipeIngredient', 'recipeInstructions',
         'author', 'cookTime', 'prepTime', 'totalTime'],
        {
            'nutrition': ['NutritionInformation'],
            'author': ['Person', 'Organization'],
        },
    ),
    'LocalBusiness': _rule(
        ['name', 'address', 'telephone', 'image', 'priceRange',
         'openingHoursSpecification'],
        {'address': ['PostalAddress']},
    ),
    'Event': _rule(
        ['name', 'startDate', 'location'],
        {
            'location': ['Place', 'VirtualLocation', 'PostalAddress'],
            'performer': ['Person', 'Organization'],
            'organizer': ['Person', 'Organization'],
        },
    ),
    'FAQPage': _rule(['mainEntity'], {'mainEntity': ['Question']}),
    # Nested under FAQPage.mainEntity
    'Question': _rule(['name', 'acceptedAnswer'], {'acceptedAnswer': ['Answer']}),
    'VideoObject': _rule(
        ['name', 'description', 'thumbnailUrl', 'uploadDate', 'contentUrl'],
    ),
})


def get_rule(schema_type: str) -> Optional[SchemaRule]:
    """Look up the rule for a schema.org type, if one is defined."""
    return SCHEMA_RULES.get(schema_type)
