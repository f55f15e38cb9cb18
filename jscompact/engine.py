from __future__ import annotations

import os
import typing as t
from dataclasses import dataclass, field

from py_mini_racer import JSEvalException, MiniRacer

from jscompact.pipeline import Pipeline
from jscompact.stages.assembler import Comment
from jscompact.utils import get_logger, load_file, source_excerpt

logger = get_logger(__name__)

ENGINE_ENV = "JSCOMPACT_UGLIFY_JS"
DRIVER_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "js", "driver.js")


class EngineExecutionError(Exception):
    """The engine failed to parse or transform the input."""

    def __init__(self, message: str, *, source: t.Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        excerpt = source_excerpt(self.source)
        if excerpt:
            return f"{self.message} (source: {excerpt!r})"
        return self.message


class EngineUnavailableError(EngineExecutionError):
    """The UglifyJS bundle could not be located."""


@dataclass
class EngineResult:
    code: str
    comments: t.List[Comment] = field(default_factory=list)


class Engine(t.Protocol):
    def execute(self, pipeline: Pipeline) -> EngineResult: ...

    def split_lines(self, code: str, max_line_length: int) -> str: ...


def _js_message(exc: Exception) -> str:
    """First line of a V8 error, without the driver stack trace."""
    lines = [ln.strip() for ln in str(exc).splitlines() if ln.strip()]
    for line in lines:
        if "Error:" in line:
            return line
    return lines[0] if lines else exc.__class__.__name__


def _bundle_path(path: t.Optional[str]) -> str:
    candidate = path or os.getenv(ENGINE_ENV)
    if not candidate:
        raise EngineUnavailableError(f"UglifyJS bundle not configured; pass a path or set {ENGINE_ENV}")
    if not os.path.isfile(candidate):
        raise EngineUnavailableError(f"UglifyJS bundle not found: {candidate}")
    return candidate


class MiniRacerEngine:
    """UglifyJS v1 running inside one embedded V8 context.

    The context is created once and reused by every call, so an instance must not be
    shared between threads without external locking.
    """

    def __init__(self, bundle_path: t.Optional[str] = None):
        self.bundle_path = _bundle_path(bundle_path)
        self._ctx = MiniRacer()
        try:
            self._ctx.eval(load_file(self.bundle_path))
            self._ctx.eval(load_file(DRIVER_PATH))
        except JSEvalException as e:
            raise EngineUnavailableError(f"failed to load UglifyJS from {self.bundle_path}: {e}") from e
        logger.debug("engine ready bundle=%s", self.bundle_path)

    def execute(self, pipeline: Pipeline) -> EngineResult:
        try:
            raw = self._ctx.call("jscompact.run", pipeline.to_payload(), pipeline.source)
        except JSEvalException as e:
            raise EngineExecutionError(_js_message(e), source=pipeline.source) from e
        comments = [Comment(kind=c["kind"], text=c["text"]) for c in raw.get("comments") or []]
        return EngineResult(code=raw.get("code") or "", comments=comments)

    def split_lines(self, code: str, max_line_length: int) -> str:
        try:
            return self._ctx.call("jscompact.splitLines", code, int(max_line_length))
        except JSEvalException as e:
            raise EngineExecutionError(_js_message(e), source=code) from e
