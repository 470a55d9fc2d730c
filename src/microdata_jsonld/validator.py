"""
Schema Validator

Checks a JSON-LD document against schema.org best practices:
- Recommended properties per type
- Expected types of nested objects
- Offer price/currency consistency

Validation is best-effort: shapes it does not understand are skipped, never
reported as errors.
"""

import json
import logging
from typing import Any, Iterable, List, Mapping, Optional

from microdata_jsonld.constants import GRAPH_KEY, TYPE_KEY, URL_SENTINEL
from microdata_jsonld.exceptions import InvalidJSONError
from microdata_jsonld.models import Finding, FindingLevel
from microdata_jsonld.rules import SCHEMA_RULES, SchemaRule

logger = logging.getLogger(__name__)


def effective_type(item: Any) -> Optional[str]:
    """Return the type used for rule lookup, or None for untyped values.

    When @type is a list, the first entry wins.
    """
    if not isinstance(item, dict):
        return None
    schema_type = item.get(TYPE_KEY)
    if isinstance(schema_type, list):
        schema_type = schema_type[0] if schema_type else None
    if not isinstance(schema_type, str) or not schema_type:
        return None
    return schema_type


def is_empty(value: Any) -> bool:
    """True for missing values, blank strings and empty containers."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, (list, dict)):
        return len(value) == 0
    return False


def load_json_ld(text: str) -> Any:
    """Parse JSON-LD text.

    Raises:
        InvalidJSONError: If the text is not valid JSON
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidJSONError(str(e)) from e
    except RecursionError as e:
        # The json decoder itself recurses per nesting level
        raise InvalidJSONError("document is nested too deeply") from e


def _as_sequence(value: Any) -> List[Any]:
    return value if isinstance(value, list) else [value]


class SchemaValidator:
    """Validate JSON-LD documents against a rule table."""

    def __init__(self, rules: Optional[Mapping[str, SchemaRule]] = None):
        """Initialize the validator.

        Args:
            rules: Type -> rule mapping (defaults to the built-in table)
        """
        self.rules = SCHEMA_RULES if rules is None else rules

    def validate(self, document: Any) -> List[Finding]:
        """
        Validate a JSON-LD document.

        Args:
            document: Single item or a document holding an @graph list

        Returns:
            Findings in traversal order (empty when nothing to report)
        """
        findings: List[Finding] = []

        if not isinstance(document, dict):
            return findings

        if document.get(GRAPH_KEY) is not None:
            for item in self._graph_members(document[GRAPH_KEY]):
                self._check_item(item, findings)
        else:
            self._check_item(document, findings)

        logger.debug(f"Validation produced {len(findings)} finding(s)")
        return findings

    def validate_json(self, text: str) -> List[Finding]:
        """
        Parse JSON-LD text and validate it.

        Raises:
            InvalidJSONError: If the text is not valid JSON
        """
        return self.validate(load_json_ld(text))

    @staticmethod
    def _graph_members(graph: Any) -> Iterable[Any]:
        if isinstance(graph, list):
            return graph
        if isinstance(graph, dict):
            return [graph]
        return []

    def _check_item(self, item: Any, findings: List[Finding]) -> None:
        """Check one item and then its typed children, depth-first.

        Uses an explicit stack; children are pushed in reverse so they are
        visited in property order.
        """
        stack = [item]

        while stack:
            current = stack.pop()
            schema_type = effective_type(current)
            if schema_type is None:
                # Untyped fragments are presentational wrappers
                continue

            rule = self.rules.get(schema_type)
            if rule is not None:
                self._check_recommended_properties(schema_type, rule, current, findings)
                self._check_property_types(rule, current, findings)

            children = [
                sub_item
                for value in current.values()
                if isinstance(value, (dict, list))
                for sub_item in _as_sequence(value)
                if effective_type(sub_item) is not None
            ]
            stack.extend(reversed(children))

    def _check_recommended_properties(
        self,
        schema_type: str,
        rule: SchemaRule,
        item: dict,
        findings: List[Finding],
    ) -> None:
        for prop in rule.recommended:
            if is_empty(item.get(prop)):
                findings.append(Finding(
                    FindingLevel.SUGGESTION,
                    f"The '{prop}' property is recommended for a '{schema_type}' but is missing.",
                ))

        # A price is meaningless without its currency
        if (
            schema_type == 'Offer'
            and not is_empty(item.get('price'))
            and is_empty(item.get('priceCurrency'))
        ):
            findings.append(Finding(
                FindingLevel.WARNING,
                "An 'Offer' with a 'price' should also have a 'priceCurrency' (e.g., 'USD').",
            ))

    def _check_property_types(
        self,
        rule: SchemaRule,
        item: dict,
        findings: List[Finding],
    ) -> None:
        for prop, expected_types in rule.type_checks.items():
            if item.get(prop) is None:
                continue

            for value in _as_sequence(item[prop]):
                if isinstance(value, str):
                    if URL_SENTINEL not in expected_types:
                        findings.append(Finding(
                            FindingLevel.WARNING,
                            f"The '{prop}' property should be a structured object "
                            f"(e.g., a '{expected_types[0]}') but it's a plain text string.",
                        ))
                    continue

                actual_type = effective_type(value)
                if actual_type is not None and actual_type not in expected_types:
                    findings.append(Finding(
                        FindingLevel.WARNING,
                        f"The '{prop}' property has a type of '{actual_type}', "
                        f"but one of {', '.join(expected_types)} is expected.",
                    ))
