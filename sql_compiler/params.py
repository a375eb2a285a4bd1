"""
Typed statement parameters.
A BoundValue keeps the semantic type of a value next to the value itself, so a
list of mixed parameters can still be bound correctly slot by slot.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence, Tuple

from errors import BindingInternalError, BuilderContractError
from schema_registry.models import SemanticType


INT32_MIN, INT32_MAX = -2**31, 2**31 - 1
INT64_MIN, INT64_MAX = -2**63, 2**63 - 1
FLOAT32_MAX = 3.4028234663852886e38


def _check_int(value: Any, low: int, high: int, semantic_type: SemanticType) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise BuilderContractError(
            f"Expected int for {semantic_type.value}, got {type(value).__name__} {value!r}"
        )
    if not low <= value <= high:
        raise BuilderContractError(f"{value} is out of range for {semantic_type.value}")
    return value


def _check_float(value: Any, semantic_type: SemanticType) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BuilderContractError(
            f"Expected float for {semantic_type.value}, got {type(value).__name__} {value!r}"
        )
    try:
        value = float(value)
    except OverflowError:
        raise BuilderContractError(f"Integer is out of range for {semantic_type.value}") from None
    if semantic_type == SemanticType.FLOAT32 and math.isfinite(value) and abs(value) > FLOAT32_MAX:
        raise BuilderContractError(f"{value} is out of range for {semantic_type.value}")
    return value


def _check_text(value: Any, semantic_type: SemanticType) -> str:
    if not isinstance(value, str):
        raise BuilderContractError(
            f"Expected str for {semantic_type.value}, got {type(value).__name__} {value!r}"
        )
    if "\x00" in value:
        raise BuilderContractError("Text values cannot contain NUL characters")
    return value


VALUE_CHECKS: Dict[SemanticType, Callable[[Any], Any]] = {
    SemanticType.INT32: lambda v: _check_int(v, INT32_MIN, INT32_MAX, SemanticType.INT32),
    SemanticType.INT64: lambda v: _check_int(v, INT64_MIN, INT64_MAX, SemanticType.INT64),
    SemanticType.FLOAT32: lambda v: _check_float(v, SemanticType.FLOAT32),
    SemanticType.FLOAT64: lambda v: _check_float(v, SemanticType.FLOAT64),
    SemanticType.TEXT: lambda v: _check_text(v, SemanticType.TEXT),
}


@dataclass(frozen=True)
class BoundValue:
    """One statement parameter tagged with its semantic type."""
    semantic_type: SemanticType
    value: Any

    @classmethod
    def of(cls, semantic_type: SemanticType, value: Any) -> "BoundValue":
        """Validate a runtime value against its field type and tag it."""
        check = VALUE_CHECKS.get(semantic_type)
        if check is None:
            raise BuilderContractError(f"Unsupported parameter type {semantic_type!r}")
        return cls(semantic_type, check(value))

    def __repr__(self):
        tag = getattr(self.semantic_type, "name", self.semantic_type)
        return f"{tag}({self.value!r})"


# Driver-level conversion per tag. Every SemanticType must have an entry.
PARAM_BINDERS: Dict[SemanticType, Callable[[Any], Any]] = {
    SemanticType.INT32: int,
    SemanticType.INT64: int,
    SemanticType.FLOAT32: float,
    SemanticType.FLOAT64: float,
    SemanticType.TEXT: str,
}


def bind_parameters(params: Sequence[BoundValue]) -> List[Any]:
    """
    Convert bound values to driver values, keeping order ($i <-> params[i-1]).
    An unknown tag is a defect and stops binding instead of dropping the slot.
    """
    bound = []
    for index, param in enumerate(params, start=1):
        binder = PARAM_BINDERS.get(getattr(param, "semantic_type", None))
        if binder is None:
            raise BindingInternalError(f"No binder for parameter ${index}: {param!r}")
        bound.append(binder(param.value))
    return bound


@dataclass(frozen=True)
class Statement:
    """Generated SQL text plus its parameters in placeholder order."""
    sql: str
    params: Tuple[BoundValue, ...] = ()
    kind: str = "query"
    table_name: str = ""

    def bound_params(self) -> List[Any]:
        return bind_parameters(self.params)
