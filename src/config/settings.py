"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use STRUCTDATA_ prefix (e.g., STRUCTDATA_SEMANTIC=RDFa).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use STRUCTDATA_ prefix.

    Examples:
        STRUCTDATA_SEMANTIC=RDFa
        STRUCTDATA_DEFAULT_SUFFIX=schema
        STRUCTDATA_VOCABULARY_FILE=/etc/structdata/vocabulary.yaml
    """

    model_config = SettingsConfigDict(
        env_prefix="STRUCTDATA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Rewriter configuration
    semantic: str = Field(
        default="Microdata",
        description="Semantic flavour of the generated markup (Microdata or RDFa)",
    )

    attribute_prefix: str = Field(
        default="data",
        description="Fixed prefix of directive attribute names (data-<suffix>)",
    )

    default_suffix: str = Field(
        default="sd",
        description="Built-in directive attribute suffix, always registered",
    )

    enabled: bool = Field(
        default=True,
        description="Emit structured data; when false directives are stripped without markup",
    )

    # Vocabulary configuration
    schema_url: str = Field(
        default="https://schema.org",
        description="Base URL of the vocabulary, used to build scope annotations",
    )

    vocabulary_file: Optional[str] = Field(
        default=None,
        description="Path to a custom vocabulary YAML file (defaults to the bundled schema.yaml)",
    )

    def vocabularyPath_get(self) -> Path:
        """
        Resolve the vocabulary file to load.

        Returns:
            The configured vocabulary_file, or the schema.yaml bundled
            with the package when none is configured

        Example:
            >>> settings = AppSettings()
            >>> settings.vocabularyPath_get().name
            'schema.yaml'
        """
        if self.vocabulary_file:
            return Path(self.vocabulary_file)
        return Path(__file__).parent.parent / "vocab" / "schema.yaml"

    def attributeName_make(self, suffix: str) -> str:
        """
        Build a directive attribute name for a suffix.

        Example:
            >>> AppSettings().attributeName_make('sd')
            'data-sd'
        """
        return f"{self.attribute_prefix}-{suffix}"


# Singleton instance - import this in your code
appsettings = AppSettings()
