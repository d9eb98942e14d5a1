import logging
from pathlib import Path
from typing import Union

from ..formatter import DECIMAL_PLACES, format_output
from ..models import AnalysisResult

logger = logging.getLogger(__name__)


def save_analysis_json(
    result: AnalysisResult,
    json_path: Union[str, Path],
    indent: int = 2,
    decimals: int = DECIMAL_PLACES,
) -> None:
    """
    Save an AnalysisResult as deterministic JSON.

    Parameters
    ----------
    result : AnalysisResult
        The analysis result to save.
    json_path : str or Path
        Path where the JSON file will be saved.
    indent : int
        JSON indentation level.
    decimals : int
        Decimal places kept for every float.
    """
    json_path = Path(json_path)
    json_path.parent.mkdir(parents=True, exist_ok=True)

    with open(json_path, "w", encoding="utf-8") as f:
        f.write(format_output(result, indent=indent, decimals=decimals))
        f.write("\n")

    logger.info("Saved analysis to %s", json_path)
