"""
Parameter catalog of a shape generator.

A catalog is a list of ParameterDef. Boolean parameters may carry nested
children that only apply while the flag is enabled; flatten_parameters
walks them all.
"""

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .config import ROLES

ParameterValue = Union[float, int, str, bool]

PARAMETER_TYPES = ("number", "string", "select", "boolean")


@dataclass
class ParameterDef:
    name: str
    type: str = "number"
    label: str = ""
    default: Any = None
    min: Optional[float] = None
    max: Optional[float] = None
    unit: Optional[str] = None
    role: Optional[str] = None  # overrides name-pattern matching in the correlator
    options: List[str] = field(default_factory=list)
    children: List["ParameterDef"] = field(default_factory=list)
    description: str = ""

    def __post_init__(self):
        if self.type not in PARAMETER_TYPES:
            raise ValueError(f"Unknown parameter type '{self.type}' for '{self.name}'")
        if self.role is not None and self.role not in ROLES:
            raise ValueError(f"Unknown role '{self.role}' for '{self.name}'")
        if not self.label:
            self.label = self.name

    def to_dict(self) -> dict:
        d = {
            "name": self.name,
            "type": self.type,
            "label": self.label,
            "default": self.default,
        }
        for key in ("min", "max", "unit", "role"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        if self.options:
            d["options"] = list(self.options)
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        if self.description:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, d: dict) -> "ParameterDef":
        return cls(
            name=d["name"],
            type=d.get("type", "number"),
            label=d.get("label", ""),
            default=d.get("default"),
            min=d.get("min"),
            max=d.get("max"),
            unit=d.get("unit"),
            role=d.get("role"),
            options=list(d.get("options", [])),
            children=[cls.from_dict(c) for c in d.get("children", [])],
            description=d.get("description", ""),
        )


def is_number(value: Any) -> bool:
    """Real numbers only; booleans are flags, not numbers."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_number_param(param: ParameterDef) -> bool:
    return param.type == "number"


def flatten_parameters(params: Sequence[ParameterDef]) -> List[ParameterDef]:
    """Flatten nested boolean children into a single list, parents first."""
    result: List[ParameterDef] = []
    for param in params:
        result.append(param)
        if param.type == "boolean" and param.children:
            result.extend(flatten_parameters(param.children))
    return result


def default_values(params: Sequence[ParameterDef]) -> Dict[str, ParameterValue]:
    return {p.name: p.default for p in flatten_parameters(params) if p.default is not None}


def numeric_values(values: Mapping[str, Any]) -> Dict[str, float]:
    return {k: float(v) for k, v in values.items() if is_number(v)}


def _convert(param: ParameterDef, raw: str) -> ParameterValue:
    if param.type == "boolean":
        return raw.strip().lower() in ("true", "1")
    if param.type == "number":
        return float(raw)
    return raw


def parse_parameter_overrides(
    overrides: Sequence[str],
    params: Sequence[ParameterDef],
) -> Dict[str, ParameterValue]:
    """
    Parse "name=value" overrides on top of catalog defaults.

    Values are converted according to the declared parameter type. Unknown
    names and malformed entries raise ValueError.
    """
    by_name = {p.name: p for p in flatten_parameters(params)}
    values = default_values(params)

    for item in overrides:
        key, sep, raw = item.partition("=")
        key = key.strip().lstrip("-")
        if not sep or not key:
            raise ValueError(f"Malformed parameter override '{item}', expected name=value")
        if key not in by_name:
            available = ", ".join(sorted(by_name)) or "none"
            raise ValueError(f"Unknown parameter '{key}'. Available: {available}")
        try:
            values[key] = _convert(by_name[key], raw)
        except ValueError:
            raise ValueError(f"Parameter '{key}' expects a number, got '{raw}'")

    return values


def validate_parameter_values(
    params: Sequence[ParameterDef],
    values: Mapping[str, Any],
) -> Tuple[bool, List[str]]:
    """
    Validate parameter values against the catalog.

    Returns
    -------
    is_valid : bool
        True if every value is known, well-typed and within bounds
    errors : list of str
        List of validation errors
    """
    errors = []
    by_name = {p.name: p for p in flatten_parameters(params)}

    for name in sorted(values):
        value = values[name]
        param = by_name.get(name)
        if param is None:
            errors.append(f"Unknown parameter '{name}'")
            continue

        if param.type == "number":
            if not is_number(value):
                errors.append(f"Parameter '{name}' must be a number, got {value!r}")
                continue
            if param.min is not None and value < param.min:
                errors.append(f"{name} = {value} is below minimum {param.min}")
            elif param.max is not None and value > param.max:
                errors.append(f"{name} = {value} exceeds maximum {param.max}")
        elif param.type == "boolean" and not isinstance(value, bool):
            errors.append(f"Parameter '{name}' must be a boolean, got {value!r}")
        elif param.type == "select" and param.options and value not in param.options:
            errors.append(f"Parameter '{name}' must be one of {param.options}, got {value!r}")

    return len(errors) == 0, errors
