import json

import pytest

from jscompact.config import resolve
from jscompact.engine import EngineExecutionError
from jscompact.minifier import Minifier
from jscompact.pipeline import Pipeline, Stage, build
from jscompact.stages.assembler import Comment

PLAIN = {"copyright": False, "mangle": False, "squeeze": False, "max_line_length": None}

CONSOLE_LOG = ["call", ["dot", ["name", "console"], "log"], [["string", "hi"]]]


def _calls(engine):
    return json.loads(engine._ctx.eval("JSON.stringify(UglifyJS.calls)"))


def _ast(artifact):
    assert artifact.endswith(";")
    return json.loads(artifact[:-1])


def test_driver_maps_mangle_and_squeeze_options(stub_uglify):
    opts = {"mangle": "vars-only", "toplevel": True, "except": ["$"], "unsafe": True, "copyright": False}
    Minifier(opts, engine=stub_uglify).compile("var a;")
    calls = _calls(stub_uglify)
    assert calls["mangle"] == {"toplevel": True, "defines": {}, "except": ["$"], "no_functions": True}
    assert calls["squeeze"] == {"make_seqs": True, "dead_code": True, "keep_comps": False}
    assert calls["squeeze_more"] is True
    assert "lift_variables" not in calls


def test_driver_keeps_comparisons_and_functions_by_default(stub_uglify):
    Minifier({"copyright": False, "lift_vars": True}, engine=stub_uglify).compile("var a;")
    calls = _calls(stub_uglify)
    assert calls["mangle"]["no_functions"] is False
    assert calls["squeeze"]["keep_comps"] is True
    assert calls["lift_variables"] is True
    assert "squeeze_more" not in calls


def test_driver_gen_code_options_without_beautify(stub_uglify):
    Minifier({**PLAIN, "inline_script": True, "quote_keys": True}, engine=stub_uglify).compile("var a;")
    assert _calls(stub_uglify)["gen_code"] == {"ascii_only": False, "inline_script": True, "quote_keys": True}


def test_driver_gen_code_options_with_beautify(stub_uglify):
    opts = {**PLAIN, "ascii_only": True, "beautify": True, "beautify_options": {"indent_level": 2}}
    Minifier(opts, engine=stub_uglify).compile("var a;")
    assert _calls(stub_uglify)["gen_code"] == {
        "ascii_only": True,
        "inline_script": False,
        "quote_keys": False,
        "beautify": True,
        "indent_level": 2,
        "indent_start": 0,
        "space_colon": False,
    }


def test_driver_extracts_comment_kinds(stub_uglify):
    result = stub_uglify.execute(build(resolve(), "var a;"))
    assert result.comments == [Comment("line", " Copyright 2021"), Comment("block", " MIT ")]

    out = Minifier({"max_line_length": None}, engine=stub_uglify).compile("var a;")
    assert out.startswith("// Copyright 2021\n/* MIT */\n")


def test_driver_skips_comments_when_copyright_off(stub_uglify):
    assert stub_uglify.execute(build(resolve(PLAIN), "var a;")).comments == []


def test_driver_splits_lines_through_engine(stub_uglify):
    Minifier({**PLAIN, "max_line_length": 10}, engine=stub_uglify).compile("var a;")
    assert _calls(stub_uglify)["split_lines"] == 10


def test_strip_console_turns_statement_into_empty_block(stub_uglify):
    ast = ["toplevel", [["stat", CONSOLE_LOG], ["var", [["a", ["num", 1]]]]]]
    out = Minifier({**PLAIN, "no_console": True}, engine=stub_uglify).compile(json.dumps(ast))
    assert _ast(out) == ["toplevel", [["block"], ["var", [["a", ["num", 1]]]]]]


def test_strip_console_turns_nested_call_into_zero(stub_uglify):
    ast = ["toplevel", [["var", [["x", ["seq", CONSOLE_LOG, ["num", 1]]]]]]]
    out = Minifier({**PLAIN, "no_console": True}, engine=stub_uglify).compile(json.dumps(ast))
    assert _ast(out) == ["toplevel", [["var", [["x", ["seq", ["atom", "0"], ["num", 1]]]]]]]


def test_strip_console_leaves_other_calls(stub_uglify):
    logger_call = ["call", ["dot", ["name", "logger"], "info"], []]
    ast = ["toplevel", [["stat", logger_call]]]
    out = Minifier({**PLAIN, "no_console": True}, engine=stub_uglify).compile(json.dumps(ast))
    assert _ast(out) == ast


def test_console_untouched_without_flag(stub_uglify):
    ast = ["toplevel", [["stat", CONSOLE_LOG]]]
    out = Minifier(PLAIN, engine=stub_uglify).compile(json.dumps(ast))
    assert _ast(out) == ast


def test_parse_failure_raises_engine_error(stub_uglify):
    with pytest.raises(EngineExecutionError) as exc:
        Minifier(engine=stub_uglify).compile("var SYNTAX_ERROR = ;")
    assert exc.value.source == "var SYNTAX_ERROR = ;"
    assert "parse: Unexpected token name" in exc.value.message
    assert "\n" not in exc.value.message


def test_unknown_stage_rejected(stub_uglify):
    pipeline = Pipeline(stages=(Stage("parse"), Stage("minify_css")), source="var a;")
    with pytest.raises(EngineExecutionError) as exc:
        stub_uglify.execute(pipeline)
    assert "unknown stage: minify_css" in exc.value.message
    assert "\n" not in exc.value.message


def test_js_message_drops_v8_stack():
    from jscompact.engine import _js_message

    raw = Exception(
        "<anonymous>:106: Error: unknown stage: minify_css\n"
        "                throw new Error(\"unknown stage: \" + stage.name);\n"
        "                ^\n"
        "Error: unknown stage: minify_css\n"
        "    at run (<anonymous>:106:23)\n"
    )
    assert _js_message(raw) == "<anonymous>:106: Error: unknown stage: minify_css"
    assert _js_message(Exception("plain failure\n    at x")) == "plain failure"
