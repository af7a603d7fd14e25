"""Validated value objects for scoring inputs.

Raw numbers coming from admin forms are turned into these once, at the
boundary, so the calculators and the composer can trust their ranges.
"""

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Iterable, Optional

from credit_engine.errors import ValidationError


def as_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValidationError(f"{name} must be a number, got {value!r}")
    number = float(value)
    if math.isnan(number) or math.isinf(number):
        raise ValidationError(f"{name} must be a finite number")
    return number


@dataclass(frozen=True)
class CreditWeights:
    """Percentage split across execution, objective and collaboration credit."""

    ec: int
    oc: int
    cc: int

    @classmethod
    def create(cls, ec: Any, oc: Any, cc: Any) -> "CreditWeights":
        """Build weights, rejecting anything that does not sum to exactly 100."""
        parts = {}
        for name, value in (("EC", ec), ("OC", oc), ("CC", cc)):
            number = as_number(f"{name} weight", value)
            if not number.is_integer():
                raise ValidationError(f"{name} weight must be a whole percentage, got {value!r}")
            if number < 0 or number > 100:
                raise ValidationError(f"{name} weight must be between 0 and 100, got {value!r}")
            parts[name] = int(number)

        total = sum(parts.values())
        if total != 100:
            raise ValidationError(f"Total weight must equal 100%, got {total}%")
        return cls(ec=parts["EC"], oc=parts["OC"], cc=parts["CC"])

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreditWeights":
        """Rebuild stored weights verbatim (no sum check)."""
        return cls(ec=int(data["EC"]), oc=int(data["OC"]), cc=int(data["CC"]))

    @property
    def total(self) -> int:
        return self.ec + self.oc + self.cc

    def as_dict(self) -> Dict[str, int]:
        return {"EC": self.ec, "OC": self.oc, "CC": self.cc}


@dataclass(frozen=True)
class CreditComponents:
    """Normalized EC, OC and CC for one week, each in [0, 1]."""

    ec: float
    oc: float
    cc: float

    @classmethod
    def create(cls, ec: Any, oc: Any, cc: Any) -> "CreditComponents":
        values = {}
        for name, value in (("EC", ec), ("OC", oc), ("CC", cc)):
            number = as_number(name, value)
            if number < 0 or number > 1:
                raise ValidationError(f"{name} must be between 0 and 1, got {value!r}")
            values[name] = number
        return cls(ec=values["EC"], oc=values["OC"], cc=values["CC"])

    def as_dict(self) -> Dict[str, float]:
        return {"EC": self.ec, "OC": self.oc, "CC": self.cc}


@dataclass(frozen=True)
class KeyResult:
    """One key result's completion score and its relative weight."""

    score: float
    weight: float

    @classmethod
    def create(
        cls,
        score: Any,
        weight: Any = 1,
        scale: Optional[Iterable[float]] = None,
    ) -> "KeyResult":
        """Build a key result, checking the score against the allowed scale."""
        score_value = as_number("Key result score", score)
        weight_value = as_number("Key result weight", weight)

        if scale is not None:
            matched = next((s for s in scale if math.isclose(score_value, s)), None)
            if matched is None:
                allowed = ", ".join(f"{s:g}" for s in scale)
                raise ValidationError(f"Key result score must be one of {allowed}, got {score!r}")
            # Store the scale member, not the float noise around it
            score_value = float(matched)
        if weight_value <= 0:
            raise ValidationError(f"Key result weight must be positive, got {weight!r}")
        return cls(score=score_value, weight=weight_value)


def validate_multiplier(value: Any, minimum: float = 0.5, maximum: float = 2.0) -> float:
    """Return the multiplier as a float, or raise if outside [minimum, maximum]."""
    multiplier = as_number("Performance multiplier", value)
    if multiplier < minimum or multiplier > maximum:
        raise ValidationError(
            f"Performance multiplier must be between {minimum} and {maximum}, got {value!r}"
        )
    return multiplier
