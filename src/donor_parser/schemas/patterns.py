"""Pydantic schemas for mined extraction patterns."""

from datetime import datetime
from enum import Enum
from typing import List, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

# Patterns at or below this success rate are stored disabled.
ENABLE_THRESHOLD = 0.3


class PatternType(str, Enum):
    """Rule family a mined pattern belongs to."""

    REGEX = "regex"
    POSITIONAL = "positional"
    KEYWORD = "keyword"


PatternKey = Tuple[str, str, str]


class LearnedPattern(BaseModel):
    """A scored extraction rule, unique by (pattern_type, pattern, field)."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    pattern_type: PatternType = Field(alias="patternType")
    pattern: str = Field(min_length=1, description="Regex source, heuristic id or literal keyword")
    field: str = Field(description="Target record field (wire name)")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    success_rate: float = Field(default=0.0, ge=0.0, le=1.0, alias="successRate")
    usage_count: int = Field(default=0, ge=0, alias="usageCount")
    is_enabled: bool = Field(default=True, alias="isEnabled")
    updated_at: datetime = Field(default_factory=datetime.utcnow, alias="updatedAt")

    @property
    def key(self) -> PatternKey:
        pattern_type = getattr(self.pattern_type, "value", self.pattern_type)
        return (pattern_type, self.pattern, self.field)


class MiningStatistics(BaseModel):
    """Aggregate counters reported after a mining pass."""

    model_config = ConfigDict(populate_by_name=True)

    total_examples: int = Field(default=0, alias="totalExamples")
    regex_patterns: int = Field(default=0, alias="regexPatterns")
    positional_patterns: int = Field(default=0, alias="positionalPatterns")
    keyword_patterns: int = Field(default=0, alias="keywordPatterns")
    average_confidence: float = Field(default=0.0, alias="averageConfidence")


class MiningResult(BaseModel):
    """Outcome of a mining pass that was persisted to a pattern store."""

    model_config = ConfigDict(populate_by_name=True)

    patterns_learned: int = Field(default=0, alias="patternsLearned")
    statistics: MiningStatistics = Field(default_factory=MiningStatistics)
    patterns: List[LearnedPattern] = Field(default_factory=list)
