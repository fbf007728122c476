"""
Function workspace.

Holds the list of user-entered functions a grapher displays, keeps each
one's compiled expression, error message and detected features in sync with
its text and with the view window, and builds the per-function summary a
side panel shows.

A function whose text does not compile carries an error message and is
treated as undefined everywhere; the other functions are unaffected.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from .analysis import (
    DEFAULT_DETECTION_THRESHOLDS,
    DEFAULT_VIEW_WINDOW,
    EMPTY_FEATURE_SET,
    DetectionThresholds,
    FeatureSet,
    ViewWindow,
    describe_features,
    detect_features,
    summarize_features,
)
from .expr import CompiledExpression, ExpressionError, compile_expression

logger = logging.getLogger(__name__)

# Expression labels in summaries are cut to this many characters.
SUMMARY_LABEL_LENGTH = 20


@dataclass
class FunctionDefinition:
    """One user-entered function and everything derived from its text."""

    id: int
    expression: str = ""
    visible: bool = True
    compiled: Optional[CompiledExpression] = None
    error: Optional[str] = None
    features: FeatureSet = EMPTY_FEATURE_SET

    @property
    def is_defined(self) -> bool:
        return self.compiled is not None

    @property
    def badges(self) -> List[str]:
        return summarize_features(self.features)

    def evaluate_at(self, x: float) -> Optional[float]:
        """f(x), or None where undefined or when the text did not compile."""
        if self.compiled is None:
            return None
        return self.compiled.evaluate_at(x)


@dataclass(frozen=True)
class FunctionSummary:
    """Summary panel entry for one function."""

    function_id: int
    label: str
    lines: List[str] = field(default_factory=list)


def summary_label(expression: str) -> str:
    if len(expression) > SUMMARY_LABEL_LENGTH:
        return f"f(x) = {expression[:SUMMARY_LABEL_LENGTH]}..."
    return f"f(x) = {expression}"


class FunctionWorkspace:
    """An ordered collection of function definitions sharing a view window."""

    def __init__(
        self,
        window: ViewWindow = DEFAULT_VIEW_WINDOW,
        thresholds: DetectionThresholds = DEFAULT_DETECTION_THRESHOLDS,
    ):
        self._window = window
        self._thresholds = thresholds
        self._functions: Dict[int, FunctionDefinition] = {}
        self._next_id = 0

    @property
    def window(self) -> ViewWindow:
        return self._window

    def __iter__(self) -> Iterator[FunctionDefinition]:
        return iter(list(self._functions.values()))

    def __len__(self) -> int:
        return len(self._functions)

    def get(self, function_id: int) -> FunctionDefinition:
        try:
            return self._functions[function_id]
        except KeyError:
            raise KeyError(f"Unknown function id: {function_id}") from None

    def add(self, expression: str = "") -> FunctionDefinition:
        """Adds a function; non-blank text is compiled and analysed right away."""
        func = FunctionDefinition(id=self._next_id)
        self._next_id += 1
        self._functions[func.id] = func

        if expression:
            self.update(func.id, expression)
        return func

    def update(self, function_id: int, expression: str) -> FunctionDefinition:
        """Replaces a function's text, recompiling and re-detecting features."""
        func = self.get(function_id)
        func.expression = expression

        text = expression.strip()
        if not text:
            self._clear(func)
            return func

        try:
            func.compiled = compile_expression(text)
        except ExpressionError as e:
            logger.debug(
                "function_compile_failed",
                extra={"function_id": func.id, "error": e.message},
            )
            self._clear(func)
            func.error = e.message
            return func

        func.error = None
        self._detect(func)
        return func

    def remove(self, function_id: int) -> None:
        self.get(function_id)
        del self._functions[function_id]

    def set_visible(self, function_id: int, visible: bool) -> FunctionDefinition:
        func = self.get(function_id)
        func.visible = visible
        return func

    def toggle(self, function_id: int) -> FunctionDefinition:
        func = self.get(function_id)
        func.visible = not func.visible
        return func

    def set_window(self, window: ViewWindow) -> None:
        """Moves the view window; every compiled function is re-analysed."""
        self._window = window
        for func in self._functions.values():
            if func.compiled is not None:
                self._detect(func)

    def summary(self) -> List[FunctionSummary]:
        """
        Summary entries for visible, compiled functions with at least one
        feature, in insertion order.
        """
        entries: List[FunctionSummary] = []

        for func in self._functions.values():
            if not func.visible or func.compiled is None or func.features.is_empty():
                continue
            entries.append(
                FunctionSummary(
                    function_id=func.id,
                    label=summary_label(func.expression),
                    lines=describe_features(func.features),
                )
            )

        return entries

    def _detect(self, func: FunctionDefinition) -> None:
        # Features are replaced wholesale; nothing from a previous pass survives
        func.features = detect_features(func.compiled, self._window, self._thresholds)

    @staticmethod
    def _clear(func: FunctionDefinition) -> None:
        func.compiled = None
        func.error = None
        func.features = EMPTY_FEATURE_SET
