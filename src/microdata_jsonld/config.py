from dotenv import load_dotenv
from dataclasses import dataclass
import os

load_dotenv()  # Loads variables from .env file


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default  # Keep default if conversion fails


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Configuration for the Microdata to JSON-LD converter."""
    html_parser: str = "lxml"  # BeautifulSoup tree builder
    json_indent: int = 4  # Indent for pretty-printed output
    sanitize: bool = True  # Strip tags from strings before validating
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Returns:
            Config: Configuration instance with values from environment
        """
        return cls(
            html_parser=os.getenv("MDJ_HTML_PARSER", "lxml"),
            json_indent=_env_int("MDJ_JSON_INDENT", 4),
            sanitize=_env_bool("MDJ_SANITIZE", True),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary.

        Returns:
            Dictionary of all configuration values
        """
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }
