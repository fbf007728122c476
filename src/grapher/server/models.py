from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from grapher.analysis import DEFAULT_VIEW_WINDOW, Feature, ViewWindow


class ViewWindowModel(BaseModel):
    """Visible coordinate rectangle."""

    x_min: float = Field(DEFAULT_VIEW_WINDOW.x_min, description="Left edge", alias="xMin")
    x_max: float = Field(DEFAULT_VIEW_WINDOW.x_max, description="Right edge", alias="xMax")
    y_min: float = Field(DEFAULT_VIEW_WINDOW.y_min, description="Bottom edge", alias="yMin")
    y_max: float = Field(DEFAULT_VIEW_WINDOW.y_max, description="Top edge", alias="yMax")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _check_bounds(self) -> "ViewWindowModel":
        # ViewWindow raises ValueError, which pydantic reports as a 422
        self.to_window()
        return self

    def to_window(self) -> ViewWindow:
        return ViewWindow(x_min=self.x_min, x_max=self.x_max, y_min=self.y_min, y_max=self.y_max)


class EvaluateRequest(BaseModel):
    """Evaluate an expression at a list of points."""

    expression: str = Field(..., description="Expression in one variable, e.g. '2x^2 + 1'")
    xs: List[float] = Field(..., description="Values of the free variable", max_length=10000)
    variable: str = Field("x", description="Name of the free variable")


class EvaluateResponse(BaseModel):
    expression: str = Field(..., description="Expression as submitted")
    normalized: Optional[str] = Field(None, description="Expression after implicit multiplication")
    values: List[Optional[float]] = Field(
        ..., description="f(x) per input, null where the function is undefined"
    )


class AnalyzeRequest(BaseModel):
    """Detect asymptotes and holes of an expression in a view window."""

    expression: str = Field(..., description="Expression in x")
    window: ViewWindowModel = Field(default_factory=ViewWindowModel)


class FeatureModel(BaseModel):
    type: Literal["vertical", "horizontal", "hole"]
    x: Optional[float] = None
    y: Optional[float] = None

    @classmethod
    def from_feature(cls, feature: Feature) -> "FeatureModel":
        return cls(**feature.to_dict())


class AnalyzeResponse(BaseModel):
    expression: str
    normalized: Optional[str] = None
    asymptotes: List[FeatureModel] = Field(default_factory=list)
    holes: List[FeatureModel] = Field(default_factory=list)
    descriptions: List[str] = Field(default_factory=list, description="One line per feature")
    badges: List[str] = Field(default_factory=list, description="Feature counts, e.g. '1 V.A.'")
    complete: bool = True
