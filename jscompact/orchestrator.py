import sys
import uuid
from typing import Dict, Any, Optional

from jscompact.config import BEAUTIFY_KEY
from jscompact.engine import EngineExecutionError
from jscompact.minifier import Minifier
from jscompact.utils import get_logger, load_options_file, read_source, validate_options, write_output

logger = get_logger(__name__)

BEAUTIFY_OVERRIDES = ("indent_level", "indent_start", "space_colon")


def _apply_overrides(options: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> None:
    if not overrides:
        return

    for key, value in overrides.items():
        if value is None or key in BEAUTIFY_OVERRIDES:
            continue
        options[key] = value

    # Formatting
    if any(overrides.get(k) is not None for k in BEAUTIFY_OVERRIDES):
        bo = options.get(BEAUTIFY_KEY)
        bo = dict(bo) if isinstance(bo, dict) else {}
        for k in BEAUTIFY_OVERRIDES:
            if overrides.get(k) is not None:
                bo[k] = overrides[k]
        options[BEAUTIFY_KEY] = bo


def load_options(config_path: Optional[str], overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Read and validate an options file, then layer CLI overrides on top."""
    options: Dict[str, Any] = {}
    if config_path:
        options = load_options_file(config_path)
        validate_options(options)
        logger.info("options loaded path=%s keys=%d", config_path, len(options))
    _apply_overrides(options, overrides)
    return options


def _read_input(input_path: Optional[str]) -> str:
    if not input_path or input_path == "-":
        return read_source(sys.stdin)
    with open(input_path, "r", encoding="utf-8") as f:
        return read_source(f)


def run_once(
    input_path: Optional[str] = None,
    output_path: Optional[str] = None,
    *,
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    engine_path: Optional[str] = None,
) -> str:
    """Minify one file (or stdin) and write the artifact."""
    run_id = uuid.uuid4().hex[:8]
    logger.info("=== run start id=%s input=%s ===", run_id, input_path or "-")

    try:
        options = load_options(config_path, overrides)
        minifier = Minifier(options, engine_path=engine_path)
        artifact = minifier.compile(_read_input(input_path))
        write_output(artifact, output_path)
        logger.info("output written path=%s", output_path or "-")
        return artifact
    except (EngineExecutionError, OSError) as e:
        logger.error("Minification failed: %s", e)
        raise
    finally:
        logger.info("=== run end id=%s ===", run_id)
