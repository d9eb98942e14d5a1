"""
Printability analysis orchestrator.

Runs the stats computation, the three geometry checks and the parameter
correlation against one solid, and assembles the AnalysisResult.
"""

import concurrent.futures
import logging
import math
from typing import Any, Mapping, Optional, Sequence

from .checks.connectivity import check_connectivity
from .checks.small_features import check_small_features
from .checks.thin_walls import check_thin_walls
from .config import CorrelationRules, PrintingConstants
from .correlator import correlate_parameters
from .geometry.adapter import compute_stats
from .geometry.kernel import GeometryKernel, TrimeshKernel
from .models import AnalysisResult, AnalysisStatus, ErrorType, Issues
from .parameters import ParameterDef
from .utils import timed_stage

logger = logging.getLogger(__name__)

DEGENERATE_GEOMETRY_MESSAGE = (
    "Geometry has zero or negative volume. Check for degenerate or inverted faces."
)


def analyze_solid(
    solid: Any,
    params: Sequence[ParameterDef] = (),
    values: Optional[Mapping[str, Any]] = None,
    constants: Optional[PrintingConstants] = None,
    rules: Optional[CorrelationRules] = None,
    kernel: Optional[GeometryKernel] = None,
) -> AnalysisResult:
    """
    Analyze a solid for printability issues.

    Unlike analyze(), collaborator failures propagate to the caller.

    Parameters
    ----------
    solid : Any
        Solid to analyze (borrowed; the caller keeps ownership)
    params : list of ParameterDef
        Generator parameter catalog
    values : mapping, optional
        Current parameter values
    constants : PrintingConstants, optional
        Thresholds for the checks
    rules : CorrelationRules, optional
        Parameter correlation rules
    kernel : GeometryKernel, optional
        Geometry kernel; defaults to TrimeshKernel

    Returns
    -------
    result : AnalysisResult
        PASS, FAIL, or ERROR (GEOMETRY_CRASH) for degenerate solids
    """
    if constants is None:
        constants = PrintingConstants()
    if kernel is None:
        kernel = TrimeshKernel()
    if values is None:
        values = {}

    volume = kernel.volume(solid)
    if not (math.isfinite(volume) and volume > 0):
        logger.info("Rejecting degenerate solid with volume %s", volume)
        return AnalysisResult.failure(
            ErrorType.GEOMETRY_CRASH,
            DEGENERATE_GEOMETRY_MESSAGE,
            recoverable=True,
        )

    with timed_stage("stats"):
        stats = compute_stats(kernel, solid)

    with timed_stage("thin_walls"):
        thin_walls = check_thin_walls(
            kernel, solid, constants.min_wall_thickness, constants.axis_ratio
        )

    with timed_stage("small_features"):
        small_features = check_small_features(
            kernel, solid, constants.min_feature_size, constants.axis_ratio
        )

    with timed_stage("connectivity"):
        disconnected = check_connectivity(kernel, solid, constants.comparison_tolerance)

    issues = Issues(
        thin_walls=thin_walls,
        small_features=small_features,
        disconnected=disconnected,
    )

    with timed_stage("correlation"):
        correlations = correlate_parameters(issues, params, values, rules)

    status = AnalysisStatus.FAIL if issues.has_issues() else AnalysisStatus.PASS

    logger.info(
        "Analysis %s: %d thin walls, %d small features, %s",
        status.value,
        len(thin_walls),
        len(small_features),
        f"{disconnected.component_count} disconnected components" if disconnected else "connected",
    )

    return AnalysisResult(
        status=status,
        stats=stats,
        issues=issues,
        parameter_correlations=correlations,
    )


def analyze(
    solid: Any,
    params: Sequence[ParameterDef] = (),
    values: Optional[Mapping[str, Any]] = None,
    constants: Optional[PrintingConstants] = None,
    rules: Optional[CorrelationRules] = None,
    kernel: Optional[GeometryKernel] = None,
) -> AnalysisResult:
    """
    Crash-safe analysis. Never raises; always returns a well-formed result.

    Any unexpected failure becomes an ERROR result of type INTERNAL.
    """
    try:
        return analyze_solid(solid, params, values, constants, rules, kernel)
    except Exception as e:
        logger.warning("Analysis failed: %s", e, exc_info=True)
        return AnalysisResult.failure(
            ErrorType.INTERNAL,
            f"Analysis failed: {e}",
            recoverable=True,
        )


def analyze_with_timeout(
    solid: Any,
    params: Sequence[ParameterDef] = (),
    values: Optional[Mapping[str, Any]] = None,
    timeout: Optional[float] = None,
    **kwargs,
) -> AnalysisResult:
    """
    Run analyze() with a deadline, returning a TIMEOUT error when it expires.

    The analysis runs in a single worker thread. After a timeout the worker
    keeps running to completion and still releases its components. Until it
    finishes the solid is in use: do not mutate it, and do not start another
    analysis on it (a retry must use a copy of the solid).
    """
    if timeout is None:
        return analyze(solid, params, values, **kwargs)

    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(analyze, solid, params, values, **kwargs)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            logger.warning("Analysis exceeded %.1f s deadline", timeout)
            return AnalysisResult.failure(
                ErrorType.TIMEOUT,
                f"Analysis did not finish within {timeout:g} seconds",
                recoverable=True,
            )
    finally:
        executor.shutdown(wait=False)
