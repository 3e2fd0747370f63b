"""Pydantic models for menu analysis results and lifecycle state."""

from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

MIN_HEALTH_SCORE = 1
MAX_HEALTH_SCORE = 10
DEFAULT_HEALTH_REASON = "No details available"


# =============================================================================
# Enums
# =============================================================================


class HealthCategory(str, Enum):
    """Coarse health bucket derived from a health score."""

    HEALTHY = "healthy"  # 8-10
    MODERATE = "moderate"  # 5-7
    LESS_HEALTHY = "less_healthy"  # 1-4

    @classmethod
    def from_score(cls, score: int) -> "HealthCategory":
        if 8 <= score <= 10:
            return cls.HEALTHY
        if 5 <= score <= 7:
            return cls.MODERATE
        return cls.LESS_HEALTHY

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @property
    def color(self) -> str:
        return _CATEGORY_COLORS[self]


_CATEGORY_LABELS = {
    HealthCategory.HEALTHY: "Healthy",
    HealthCategory.MODERATE: "Moderate",
    HealthCategory.LESS_HEALTHY: "Less Healthy",
}

_CATEGORY_COLORS = {
    HealthCategory.HEALTHY: "green",
    HealthCategory.MODERATE: "yellow",
    HealthCategory.LESS_HEALTHY: "red",
}


class AnalysisStatus(str, Enum):
    """Lifecycle of a single analysis session."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


# =============================================================================
# Records
# =============================================================================


class MenuItem(BaseModel):
    """
    A single menu item with its health rating.

    Field aliases follow the camelCase vocabulary the model is asked to
    answer in, so stored items serialize the same way they were received.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: UUID = Field(default_factory=uuid4, description="Unique item identifier")
    name: str = Field(..., min_length=1, description="Item name as printed on the menu")
    description: str | None = Field(None, description="Menu description, if visible")
    health_score: int = Field(
        ...,
        alias="healthScore",
        description="Health score 1-10 (10 = healthiest), clamped on construction",
    )
    health_reason: str = Field(
        DEFAULT_HEALTH_REASON, alias="healthReason", description="Short rationale for the score"
    )
    calories: str | None = Field(None, description="Model-supplied calorie estimate")

    @field_validator("health_score")
    @classmethod
    def _clamp_score(cls, value: int) -> int:
        return max(MIN_HEALTH_SCORE, min(MAX_HEALTH_SCORE, value))

    @property
    def health_category(self) -> HealthCategory:
        """Derived bucket: healthy 8-10, moderate 5-7, less healthy below."""
        return HealthCategory.from_score(self.health_score)


class AnalysisState(BaseModel):
    """
    Snapshot of the analysis lifecycle published to observers.

    ``items`` is only populated in SUCCESS and ``error_message`` only in ERROR.
    """

    model_config = ConfigDict(frozen=True)

    status: AnalysisStatus = AnalysisStatus.IDLE
    items: tuple[MenuItem, ...] = ()
    error_message: str | None = None

    @classmethod
    def idle(cls) -> "AnalysisState":
        return cls(status=AnalysisStatus.IDLE)

    @classmethod
    def loading(cls) -> "AnalysisState":
        return cls(status=AnalysisStatus.LOADING)

    @classmethod
    def success(cls, items: list[MenuItem]) -> "AnalysisState":
        return cls(status=AnalysisStatus.SUCCESS, items=tuple(items))

    @classmethod
    def failure(cls, message: str) -> "AnalysisState":
        return cls(status=AnalysisStatus.ERROR, error_message=message)

    @property
    def is_terminal(self) -> bool:
        return self.status in (AnalysisStatus.SUCCESS, AnalysisStatus.ERROR)
