from __future__ import annotations

import time
from typing import Any, Mapping, Optional

from jscompact.config import resolve
from jscompact.engine import Engine, MiniRacerEngine
from jscompact.pipeline import build
from jscompact.stages.assembler import assemble
from jscompact.stages.params import line_limit
from jscompact.utils import get_logger, read_source

logger = get_logger(__name__)


class Minifier:
    """A minification session: resolved options plus one long-lived engine.

    The options are resolved once; every :meth:`compile` call builds a fresh pipeline
    for its own source. The engine is reused across calls and is not guarded by a lock,
    so concurrent calls on one session need external synchronization. There is no
    timeout; callers that need bounded latency must wrap the call themselves.
    """

    def __init__(self, options: Optional[Mapping[str, Any]] = None, *, engine: Optional[Engine] = None, engine_path: Optional[str] = None):
        self.options = resolve(options)
        self.engine = engine if engine is not None else MiniRacerEngine(engine_path)

    def compile(self, source: Any) -> str:
        """Minify ``source`` (a string or a readable object) and return the artifact."""
        text = read_source(source)
        pipeline = build(self.options, text)

        t0 = time.monotonic()
        result = self.engine.execute(pipeline)
        artifact = assemble(
            result.code,
            result.comments,
            line_limit(self.options),
            self.engine.split_lines,
        )
        logger.info(
            "compiled bytes_in=%d bytes_out=%d stages=%s took_ms=%d",
            len(text),
            len(artifact),
            ",".join(pipeline.names),
            int((time.monotonic() - t0) * 1000),
        )
        return artifact

    compress = compile


def new(options: Optional[Mapping[str, Any]] = None, **kwargs) -> Minifier:
    return Minifier(options, **kwargs)


def compile(source: Any, options: Optional[Mapping[str, Any]] = None, **kwargs) -> str:
    """One-shot minification with a throwaway session."""
    return new(options, **kwargs).compile(source)
