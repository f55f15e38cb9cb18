from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from types import MappingProxyType

from jscompact.config import MangleMode, mangle_mode
from jscompact.stages.params import codegen_params, mangle_params, squeeze_params

PARSE = "parse"
LIFT_VARIABLES = "lift_variables"
EXTRACT_COMMENTS = "extract_comments"
STRIP_CONSOLE = "strip_console"
MANGLE = "mangle"
SQUEEZE = "squeeze"
SQUEEZE_UNSAFE = "squeeze_unsafe"
GENERATE_CODE = "generate_code"

STAGE_ORDER: t.Tuple[str, ...] = (
    PARSE,
    LIFT_VARIABLES,
    EXTRACT_COMMENTS,
    STRIP_CONSOLE,
    MANGLE,
    SQUEEZE,
    SQUEEZE_UNSAFE,
    GENERATE_CODE,
)


def _freeze(value: t.Any) -> t.Any:
    if isinstance(value, t.Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _plain(value: t.Any) -> t.Any:
    if isinstance(value, t.Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class Stage:
    name: str
    params: t.Mapping[str, t.Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", _freeze(self.params))

    def to_payload(self) -> dict:
        return {"name": self.name, "params": _plain(self.params)}


@dataclass(frozen=True)
class Pipeline:
    stages: t.Tuple[Stage, ...]
    source: str

    @property
    def names(self) -> t.List[str]:
        return [s.name for s in self.stages]

    def stage(self, name: str) -> t.Optional[Stage]:
        for s in self.stages:
            if s.name == name:
                return s
        return None

    def __contains__(self, name: object) -> bool:
        return any(s.name == name for s in self.stages)

    def to_payload(self) -> t.List[dict]:
        return [s.to_payload() for s in self.stages]


def build(config: t.Mapping[str, t.Any], source: str) -> Pipeline:
    """Assemble the stages enabled by ``config`` in their fixed order.

    ``parse`` and ``generate_code`` are always present; every other stage is gated by
    exactly one option, so flipping an option only adds or removes its own stage.
    """
    stages: t.List[Stage] = [Stage(PARSE)]

    if config.get("lift_vars"):
        stages.append(Stage(LIFT_VARIABLES))
    if config.get("copyright"):
        stages.append(Stage(EXTRACT_COMMENTS))
    if config.get("no_console"):
        stages.append(Stage(STRIP_CONSOLE))
    if mangle_mode(config.get("mangle")) is not MangleMode.OFF:
        stages.append(Stage(MANGLE, mangle_params(config)))
    if config.get("squeeze"):
        stages.append(Stage(SQUEEZE, squeeze_params(config)))
    if config.get("unsafe"):
        stages.append(Stage(SQUEEZE_UNSAFE))

    stages.append(Stage(GENERATE_CODE, codegen_params(config)))
    return Pipeline(stages=tuple(stages), source=source)
