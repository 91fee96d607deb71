"""codegraph-comments Configuration.

Settings for the redundant-comment rule and the scorer constants.

Environment variables use the COMMENT_LINT_ prefix.
Example: COMMENT_LINT_SENSITIVITY=high
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from codegraph_comments.errors import ConfigurationError


class Sensitivity(str, Enum):
    """Detection sensitivity, monotonically widening from LOW to HIGH."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    def __str__(self) -> str:
        return self.value


class ContextHandling(str, Enum):
    """How a comment category (documentation / inline) is treated."""

    STRICT = "strict"
    NORMAL = "normal"
    SKIP = "skip"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScoringConfig:
    """Obviousness scorer constants.

    Empirically tuned. Changing any value changes which comments are
    flagged and needs re-validation against the scenario fixtures.
    """

    # Comments with more normalized tokens carry extra context
    MAX_COMMENT_TOKENS: int = 8

    # Prefix match: remainder after the gloss must be shorter than this
    PREFIX_REMAINDER_LIMIT: int = 5

    # Overlap: only tokens longer than this count
    MIN_TOKEN_LENGTH: int = 2

    OVERLAP_THRESHOLD: float = 0.8
    MIN_OVERLAP_TOKENS: int = 2
    HIGH_OVERLAP_THRESHOLD: float = 0.6

    # High sensitivity: gloss substring must cover this share of the comment
    HIGH_SUBSTRING_COVERAGE: float = 0.5

    # Finding message truncation
    MESSAGE_TEXT_LIMIT: int = 50


DEFAULT_SCORING_CONFIG = ScoringConfig()


class CommentContextPolicy(BaseModel):
    """Documentation-vs-inline handling (default: skip docs, check inline)."""

    documentation_comments: ContextHandling = ContextHandling.SKIP
    inline_comments: ContextHandling = ContextHandling.NORMAL


class LintSettings(BaseSettings):
    """
    Redundant-comment rule settings.

    Validated here; the rule itself treats them as opaque. Invalid
    ignore patterns are not rejected: the rule reports them as
    configuration warnings and treats them as non-matching.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="COMMENT_LINT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    sensitivity: Sensitivity = Sensitivity.MEDIUM
    check_leading_comments: bool = True
    check_trailing_comments: bool = True
    ignore_patterns: list[str] = Field(default_factory=list)
    comment_context: CommentContextPolicy = Field(default_factory=CommentContextPolicy)

    # Process-wide bounded caches
    regex_cache_size: int = Field(default=200, gt=0)
    context_cache_size: int = Field(default=300, gt=0)

    @field_validator("sensitivity", mode="before")
    @classmethod
    def _lowercase_sensitivity(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


def load_settings(**overrides) -> LintSettings:
    """
    Settings from the environment, with explicit overrides on top.

    Raises:
        ConfigurationError: Invalid value in the environment or overrides
    """
    try:
        return LintSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid settings: {e.error_count()} error(s)",
            errors=e.errors(include_url=False),
        ) from e
