from __future__ import annotations

import copy
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

# Documented option table. Read-only; ``resolve`` hands out fresh copies.
DEFAULTS: Mapping[str, Any] = MappingProxyType({
    "mangle": True,  # True, False or "vars-only" (leave function names alone)
    "toplevel": False,  # mangle top-level names
    "except": ("$super",),  # names never mangled
    "max_line_length": 32 * 1024,
    "squeeze": True,
    "seqs": True,  # join consecutive statements into sequences
    "dead_code": True,  # drop unreachable code
    "no_console": False,  # strip console.* calls
    "lift_vars": False,  # hoist var declarations to the top of their scope
    "unsafe": False,  # optimizations that may change behavior
    "copyright": True,  # keep comments that precede the first token
    "ascii_only": False,  # escape non-ASCII characters
    "inline_script": False,  # escape </script
    "quote_keys": False,  # quote object literal keys
    "beautify": False,
    "beautify_options": MappingProxyType({
        "indent_level": 4,
        "indent_start": 0,
        "space_colon": False,
    }),
})

BEAUTIFY_KEY = "beautify_options"


class MangleMode(str, Enum):
    OFF = "off"
    ON = "on"
    VARS_ONLY = "vars-only"


_VARS_ONLY_ALIASES = {"vars", "vars-only", "vars_only"}


def mangle_mode(value: Any) -> MangleMode:
    """Normalize the ``mangle`` option into its tri-state."""
    if isinstance(value, MangleMode):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _VARS_ONLY_ALIASES:
            return MangleMode.VARS_ONLY
        if v in ("", "off", "false", "no"):
            return MangleMode.OFF
        return MangleMode.ON
    return MangleMode.ON if value else MangleMode.OFF


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return copy.deepcopy(value)


def resolve(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Merge ``overrides`` over :data:`DEFAULTS`.

    The merge is shallow except for ``beautify_options``, which is merged key by key.
    Unknown keys are carried through untouched.
    """
    cfg = _thaw(DEFAULTS)
    if not overrides:
        return cfg

    for key, value in overrides.items():
        if key == BEAUTIFY_KEY and isinstance(value, Mapping):
            cfg[BEAUTIFY_KEY].update(_thaw(value))
        else:
            cfg[key] = _thaw(value)
    return cfg
