"""Printing thresholds and parameter-correlation rules.

Thresholds are passed explicitly into every check; nothing in the engine
reads module-level constants at analysis time.

Units: All spatial values are in millimeters.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass
class PrintingConstants:
    """Thresholds used by the printability checks."""
    min_wall_thickness: float = 1.2
    min_feature_size: float = 1.5
    comparison_tolerance: float = 0.01  # below print resolution
    axis_ratio: float = 0.3  # min extent < axis_ratio * max extent -> axis aligned
    decimal_places: int = 3


CONSTANT_BOUNDS = {
    "min_wall_thickness": (0.05, 20.0, "mm"),
    "min_feature_size": (0.05, 20.0, "mm"),
    "comparison_tolerance": (0.0, 1.0, "mm"),
    "axis_ratio": (0.0, 1.0, "ratio"),
    "decimal_places": (0, 9, "digits"),
}


def validate_constants(constants: PrintingConstants) -> Tuple[bool, List[str]]:
    """
    Validate PrintingConstants against bounds.

    Parameters
    ----------
    constants : PrintingConstants
        Constants to validate

    Returns
    -------
    is_valid : bool
        True if all constants are within bounds
    warnings : list of str
        List of validation messages
    """
    warnings = []

    for name, (min_val, max_val, unit) in CONSTANT_BOUNDS.items():
        value = getattr(constants, name)
        if value < min_val:
            warnings.append(f"{name} = {value} {unit} is below minimum {min_val} {unit}")
        elif value > max_val:
            warnings.append(f"{name} = {value} {unit} exceeds maximum {max_val} {unit}")

    if constants.comparison_tolerance >= constants.min_wall_thickness:
        warnings.append(
            f"comparison_tolerance ({constants.comparison_tolerance}mm) should be < "
            f"min_wall_thickness ({constants.min_wall_thickness}mm)"
        )

    return len(warnings) == 0, warnings


def fdm_standard() -> PrintingConstants:
    """0.4mm nozzle FDM printer, default profile."""
    return PrintingConstants()


def fdm_fine() -> PrintingConstants:
    """
    0.25mm nozzle FDM printer.

    Thinner walls are reliable at the cost of print time.
    """
    return PrintingConstants(
        min_wall_thickness=0.8,
        min_feature_size=1.0,
    )


def resin_standard() -> PrintingConstants:
    """MSLA resin printer with standard resin."""
    return PrintingConstants(
        min_wall_thickness=0.5,
        min_feature_size=0.3,
        comparison_tolerance=0.005,
    )


PRESETS = {
    "fdm_standard": fdm_standard,
    "fdm_fine": fdm_fine,
    "resin_standard": resin_standard,
}


def get_preset(name: str) -> PrintingConstants:
    """Return the named PrintingConstants preset."""
    if name not in PRESETS:
        available = ", ".join(sorted(PRESETS))
        raise ValueError(f"Unknown preset '{name}'. Available: {available}")
    return PRESETS[name]()


# Roles a parameter can play with respect to detected issues
ROLE_WALL = "wall"
ROLE_FEATURE = "feature"
ROLE_SPACING = "spacing"
ROLE_CAVITY = "cavity"

ROLES = (ROLE_WALL, ROLE_FEATURE, ROLE_SPACING, ROLE_CAVITY)


def _default_role_patterns() -> Dict[str, List[str]]:
    return {
        ROLE_WALL: ["thickness", "wall", "width"],
        ROLE_FEATURE: ["size", "radius", "diameter", "feature", "detail"],
        ROLE_SPACING: ["spacing", "gap", "offset", "distance", "clearance"],
        ROLE_CAVITY: ["cavity", "bore", "hole", "inner"],
    }


@dataclass
class CorrelationRules:
    """
    Mapping from parameter names to the issue categories they influence.

    role_patterns maps a role to case-insensitive name substrings. Roles are
    checked in ROLES order and a parameter may match several. A generator
    may supply its own table, or set ParameterDef.role explicitly.
    """
    role_patterns: Dict[str, List[str]] = field(default_factory=_default_role_patterns)
    relevance_margin: float = 1.2  # wall/feature params correlate below required * margin
    magnitude_spread: float = 0.25  # gap spread (fraction of worst gap) still rated "high"

    def roles_for(self, name: str) -> List[str]:
        lower = name.lower()
        return [
            role
            for role in ROLES
            if any(p.lower() in lower for p in self.role_patterns.get(role, []))
        ]
