"""Data models for Microdata extraction and schema validation."""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

# A property value is a scalar string, a nested item, or a list of either.
# The Python type is the discriminator: list means a repeated property.
Item = Dict[str, Any]
PropertyValue = Union[str, Item, List[Union[str, Item]]]


class FindingLevel(str, Enum):
    """Severity of a validation finding."""
    WARNING = "warning"
    SUGGESTION = "suggestion"


@dataclass(frozen=True)
class Finding:
    """A single validation finding."""
    level: FindingLevel
    message: str

    def to_dict(self) -> Dict[str, str]:
        """Convert the finding to a JSON-compatible dictionary."""
        return {"level": self.level.value, "message": self.message}


# ============================================================================
# Conversion Models
# ============================================================================

@dataclass
class ConversionResult:
    """Outcome of converting one HTML document to JSON-LD."""

    success: bool
    message: str
    json_ld: Item = field(default_factory=dict)
    source: Optional[str] = None  # File name or URL supplied by the caller

    # Validation findings, filled in when the caller asks for a check
    findings: List[Finding] = field(default_factory=list)

    @property
    def warnings(self) -> List[Finding]:
        """Findings with warning level."""
        return [f for f in self.findings if f.level == FindingLevel.WARNING]

    @property
    def suggestions(self) -> List[Finding]:
        """Findings with suggestion level."""
        return [f for f in self.findings if f.level == FindingLevel.SUGGESTION]

    def to_json(self, pretty: bool = True, indent: int = 4) -> str:
        """Serialize the JSON-LD document.

        Unicode and slashes are written unescaped.

        Args:
            pretty: Indent the output
            indent: Indentation width when pretty

        Returns:
            JSON string, or an empty string when the conversion failed
        """
        if not self.json_ld:
            return ""
        return json.dumps(
            self.json_ld,
            ensure_ascii=False,
            indent=indent if pretty else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the result to a JSON-compatible dictionary."""
        return {
            "source": self.source,
            "success": self.success,
            "message": self.message,
            "json_ld": self.json_ld,
            "findings": [f.to_dict() for f in self.findings],
        }
