"""
Configuration management using Pydantic Settings.

Two configuration objects:
- WorkbookSchema: the vendor vocabulary (worksheet names, cell styles,
  column names), automatically loaded from the packaged schema.yaml
- AppConfig: runtime settings (log level, output delimiter) from
  environment variables and an optional .env file
"""

from pathlib import Path
from typing import Literal, Optional
import yaml
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SCHEMA_PATH = Path(__file__).parent / 'schema.yaml'


class WorkbookSchema(BaseSettings):
    """
    Vendor vocabulary shared by all sheet extractors.

    Loaded from schema.yaml next to this module. Values passed explicitly
    (e.g. from tests) take precedence over the file.

    Attributes:
        toc_worksheet: Name of the table-of-contents worksheet
        registered_voters_worksheet: Name of the registered-voters worksheet
        page_style: Style marker on TOC page-number cells
        vote_count_style: Style marker on numeric vote-tally cells
        header_label_style: Style marker on a results sheet's title cell
        registered_voters_column: Header text of the registered voters column
        ballots_cast_column: Header text of the ballots cast column
        voter_turnout_column: Header text of the turnout column
        percent_suffix: Suffix stripped from turnout text before parsing

    Example:
        >>> schema = WorkbookSchema()
        >>> schema.vote_count_style
        'VoteCount'
    """

    toc_worksheet: str = Field(description="Table of contents worksheet name")
    registered_voters_worksheet: str = Field(description="Registered voters worksheet name")

    page_style: str = Field(description="StyleID of TOC page cells")
    vote_count_style: str = Field(description="StyleID of vote count cells")
    header_label_style: str = Field(description="StyleID of election title cells")

    registered_voters_column: str = Field(description="Registered voters header")
    ballots_cast_column: str = Field(description="Ballots cast header")
    voter_turnout_column: str = Field(description="Voter turnout header")

    percent_suffix: str = Field(min_length=1, description="Suffix of turnout percentages")

    model_config = SettingsConfigDict(
        env_prefix='SCYTL_SCHEMA_',
        extra='ignore',
        frozen=True,
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_schema(cls, data: dict) -> dict:
        """
        Fill in every value not provided explicitly from schema.yaml.
        """
        if not SCHEMA_PATH.exists():
            raise FileNotFoundError(
                f"Schema file not found at {SCHEMA_PATH}. "
                f"Reinstall the package to restore it."
            )

        with open(SCHEMA_PATH, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        return {**yaml_data, **(data or {})}


# Singleton pattern - loaded once, cached forever
_schema: Optional[WorkbookSchema] = None


def get_schema() -> WorkbookSchema:
    """
    Get global schema instance (lazy-loaded singleton).

    Example:
        >>> get_schema() is get_schema()
        True
    """
    global _schema
    if _schema is None:
        _schema = WorkbookSchema()
    return _schema


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Environment Variables (from .env):
        SCYTL_LOG_LEVEL: Logging level name (e.g. "INFO")
        SCYTL_DELIMITER: Field delimiter of the rendered output
        SCYTL_REGION_INDENT: Prefix of each registered-voters line

    Example:
        >>> config = get_app_config()
        >>> config.delimiter
        ';'
    """

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level for the command line tool"
    )

    delimiter: str = Field(
        default=";",
        min_length=1,
        description="Field delimiter of the rendered output"
    )

    region_indent: str = Field(
        default="  ",
        description="Indentation of region lines in the registered voters section"
    )

    model_config = SettingsConfigDict(
        env_prefix='SCYTL_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        """Accept level names in any case ("info" -> "INFO")."""
        return value.upper() if isinstance(value, str) else value


_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """Get global application config instance (lazy-loaded singleton)."""
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
