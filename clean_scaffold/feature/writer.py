"""
Writes scaffolded artifacts to disk.
"""

import shutil
from pathlib import Path
from typing import List, Union

from ..logging_config import get_logger
from .scaffold import ScaffoldError, ScaffoldResult

logger = get_logger(__name__)


def feature_root(result: ScaffoldResult, output_dir: Union[str, Path]) -> Path:
    """Directory a feature is written to."""
    return Path(output_dir) / result.root


def write_artifacts(
    result: ScaffoldResult, output_dir: Union[str, Path], encoding: str = "utf-8"
) -> List[Path]:
    """
    Create the feature layout and write every artifact.

    An existing feature root is never touched: the batch is abandoned
    with a warning and nothing is written. A failed write removes the
    partly written root.

    Args:
        result: Scaffold output
        output_dir: Directory that will contain the feature root
        encoding: File encoding for the generated sources

    Returns:
        Paths written, empty when the feature root already existed

    Raises:
        ScaffoldError: If the filesystem refuses a write
    """
    root = feature_root(result, output_dir)
    if root.exists():
        logger.warning("Feature directory %s already exists, nothing written", root)
        return []

    written = []
    try:
        for directory in result.directories:
            (root / directory).mkdir(parents=True, exist_ok=True)

        for artifact in result.artifacts:
            path = root / artifact.relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            # newline="" keeps the configured line ending as generated
            with open(path, "w", encoding=encoding, newline="") as f:
                f.write(artifact.source_text)
            logger.info("Wrote %s", path)
            written.append(path)
    except OSError as e:
        shutil.rmtree(root, ignore_errors=True)
        raise ScaffoldError(f"Failed to write feature {result.root}: {e}") from e

    return written
