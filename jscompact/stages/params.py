from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from jscompact.config import BEAUTIFY_KEY, MangleMode, mangle_mode


def mangle_params(config: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "toplevel": bool(config.get("toplevel")),
        "except": [str(n) for n in (config.get("except") or [])],
        "functions_excluded": mangle_mode(config.get("mangle")) is MangleMode.VARS_ONLY,
    }


def squeeze_params(config: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "collapse_sequences": bool(config.get("seqs")),
        "remove_dead_code": bool(config.get("dead_code")),
        # unsafe squeezing may rewrite comparisons
        "keep_comparisons": not config.get("unsafe"),
    }


def codegen_params(config: Mapping[str, Any]) -> Dict[str, Any]:
    """Code generator options; formatting keys appear only when beautifying."""
    params: Dict[str, Any] = {
        "ascii_only": bool(config.get("ascii_only")),
        "escape_closing_script_tag": bool(config.get("inline_script")),
        "quote_object_keys": bool(config.get("quote_keys")),
    }
    if config.get("beautify"):
        params.update(dict(config.get(BEAUTIFY_KEY) or {}))
        params["pretty"] = True
    return params


def line_limit(config: Mapping[str, Any]) -> Optional[int]:
    """Effective maximum output line length, or ``None`` when lines are left alone."""
    if config.get("beautify"):
        return None
    raw = config.get("max_line_length")
    if raw is None or isinstance(raw, bool):
        return None
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return None
    return limit if limit > 0 else None
