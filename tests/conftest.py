import os

import pytest

from jscompact.engine import EngineResult
from jscompact.stages.assembler import Comment


class RecordingEngine:
    """Stands in for UglifyJS: records pipelines and returns canned output."""

    def __init__(self, code="var a=1", comments=None):
        self.code = code
        self.comments = comments or []
        self.pipelines = []
        self.splits = []

    def execute(self, pipeline):
        self.pipelines.append(pipeline)
        comments = self.comments if "extract_comments" in pipeline else []
        return EngineResult(code=self.code, comments=list(comments))

    def split_lines(self, code, max_line_length):
        self.splits.append(max_line_length)
        return code.replace(",", ",\n")


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def commented_engine():
    return RecordingEngine(
        code="var a=1,b=2",
        comments=[Comment("line", " Copyright 2021"), Comment("block", " MIT ")],
    )


@pytest.fixture
def uglify():
    """Real UglifyJS engine, only when a bundle is configured."""
    pytest.importorskip("py_mini_racer")
    path = os.getenv("JSCOMPACT_UGLIFY_JS")
    if not path or not os.path.isfile(path):
        pytest.skip("JSCOMPACT_UGLIFY_JS not set")
    from jscompact.engine import MiniRacerEngine
    return MiniRacerEngine(path)


@pytest.fixture
def stub_uglify():
    """Driver running against a recording UglifyJS look-alike."""
    from jscompact.engine import MiniRacerEngine
    return MiniRacerEngine(os.path.join(os.path.dirname(__file__), "fixtures", "stub_uglify.js"))
