"""
Command line front end for the printability analyzer.

Usage:
    printability-analyze part.stl --catalog part_params.json --param wallThickness=1.0

Prints the analysis JSON to stdout. Exit code 0 on PASS, 1 otherwise.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .analyzer import analyze_with_timeout
from .config import PRESETS, PrintingConstants, get_preset, validate_constants
from .errors import PrintabilityError
from .formatter import format_output
from .io.exporters import save_analysis_json
from .io.loaders import load_mesh, load_parameter_catalog
from .models import AnalysisResult, AnalysisStatus, ErrorType
from .parameters import parse_parameter_overrides, validate_parameter_values

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="printability-analyze",
        description="Check a solid mesh for 3D printability issues",
    )
    parser.add_argument(
        "mesh",
        type=str,
        help="Mesh file to analyze (STL, OBJ, PLY, ...)",
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help="JSON parameter catalog of the generator that built the mesh",
    )
    parser.add_argument(
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Current parameter value (repeatable)",
    )
    parser.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default="fdm_standard",
        help="Printer threshold preset (default: fdm_standard)",
    )
    parser.add_argument(
        "--min-wall-thickness",
        type=float,
        default=None,
        help="Override minimum wall thickness in mm",
    )
    parser.add_argument(
        "--min-feature-size",
        type=float,
        default=None,
        help="Override minimum feature size in mm",
    )
    parser.add_argument(
        "--decimals",
        type=int,
        default=None,
        help="Decimal places kept in the JSON report (default: 3)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Give up after this many seconds",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Also write the JSON report to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug)",
    )
    return parser


def _invalid_input(message: str) -> AnalysisResult:
    return AnalysisResult.failure(ErrorType.INVALID_INPUT, message, recoverable=True)


def constants_from_args(args: argparse.Namespace) -> PrintingConstants:
    """Preset thresholds with command line overrides applied."""
    constants = get_preset(args.preset)
    if args.min_wall_thickness is not None:
        constants.min_wall_thickness = args.min_wall_thickness
    if args.min_feature_size is not None:
        constants.min_feature_size = args.min_feature_size
    if args.decimals is not None:
        constants.decimal_places = args.decimals
    return constants


def run(args: argparse.Namespace, constants: Optional[PrintingConstants] = None) -> AnalysisResult:
    """Load inputs, validate them and run the analysis."""
    if constants is None:
        constants = constants_from_args(args)

    ok, warnings = validate_constants(constants)
    if not ok:
        return _invalid_input("; ".join(warnings))

    try:
        catalog = load_parameter_catalog(args.catalog) if args.catalog else []
        values = parse_parameter_overrides(args.param, catalog)
    except (PrintabilityError, ValueError) as e:
        return _invalid_input(str(e))

    ok, errors = validate_parameter_values(catalog, values)
    if not ok:
        return _invalid_input("; ".join(errors))

    try:
        mesh = load_mesh(args.mesh)
    except PrintabilityError as e:
        return _invalid_input(str(e))

    return analyze_with_timeout(
        mesh,
        catalog,
        values,
        timeout=args.timeout,
        constants=constants,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    constants = constants_from_args(args)
    result = run(args, constants)

    print(format_output(result, decimals=constants.decimal_places))
    if args.output:
        save_analysis_json(result, args.output, decimals=constants.decimal_places)

    return 0 if result.status == AnalysisStatus.PASS else 1


if __name__ == "__main__":
    sys.exit(main())
