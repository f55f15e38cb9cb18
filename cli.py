#!/usr/bin/env python3
import argparse
import sys

from jscompact.engine import EngineExecutionError
from jscompact.orchestrator import run_once


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compact JavaScript with UglifyJS")
    parser.add_argument("input", nargs="?", default="-", help="JavaScript file (default: stdin)")
    parser.add_argument("-o", "--output", default="-", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Path to YAML options file")
    parser.add_argument("--engine", dest="engine_path", help="Path to the UglifyJS v1 bundle (overrides JSCOMPACT_UGLIFY_JS)")
    # mangling
    parser.add_argument("--mangle", dest="mangle", action="store_true", help="Mangle variable and function names")
    parser.add_argument("--no-mangle", dest="mangle", action="store_false", help="Keep all names")
    parser.add_argument("--mangle-vars-only", dest="mangle", action="store_const", const="vars-only", help="Mangle variables but not function names")
    parser.add_argument("--toplevel", dest="toplevel", action="store_true", help="Mangle top-level names")
    parser.add_argument("--except", dest="except_names", action="append", metavar="NAME", help="Name never mangled (repeatable)")
    # squeezing
    parser.add_argument("--squeeze", dest="squeeze", action="store_true", help="Squeeze statements")
    parser.add_argument("--no-squeeze", dest="squeeze", action="store_false", help="Skip statement squeezing")
    parser.add_argument("--seqs", dest="seqs", action="store_true", help="Join consecutive statements into sequences")
    parser.add_argument("--no-seqs", dest="seqs", action="store_false", help="Keep statements separate")
    parser.add_argument("--dead-code", dest="dead_code", action="store_true", help="Remove unreachable code")
    parser.add_argument("--no-dead-code", dest="dead_code", action="store_false", help="Keep unreachable code")
    parser.add_argument("--unsafe", dest="unsafe", action="store_true", help="Enable optimizations that may change behavior")
    parser.add_argument("--lift-vars", dest="lift_vars", action="store_true", help="Hoist var declarations")
    parser.add_argument("--no-console", dest="no_console", action="store_true", help="Strip console.* calls")
    # output
    parser.add_argument("--copyright", dest="copyright", action="store_true", help="Keep leading comments")
    parser.add_argument("--no-copyright", dest="copyright", action="store_false", help="Drop leading comments")
    parser.add_argument("--max-line-length", dest="max_line_length", type=int, help="Split output lines longer than N (0 disables)")
    parser.add_argument("--ascii-only", dest="ascii_only", action="store_true", help="Escape non-ASCII characters")
    parser.add_argument("--inline-script", dest="inline_script", action="store_true", help="Escape </script")
    parser.add_argument("--quote-keys", dest="quote_keys", action="store_true", help="Quote object literal keys")
    parser.add_argument("--beautify", dest="beautify", action="store_true", help="Emit indented code")
    parser.add_argument("--indent-level", dest="indent_level", type=int, help="Indent width when beautifying")
    parser.add_argument("--indent-start", dest="indent_start", type=int, help="Initial indent when beautifying")
    parser.add_argument("--space-colon", dest="space_colon", action="store_true", help="Space after colons when beautifying")
    parser.set_defaults(
        mangle=None, toplevel=None, squeeze=None, seqs=None, dead_code=None, unsafe=None,
        lift_vars=None, no_console=None, copyright=None, ascii_only=None, inline_script=None,
        quote_keys=None, beautify=None, space_colon=None,
    )
    return parser


def overrides_from_args(args: argparse.Namespace) -> dict:
    return {
        "mangle": args.mangle,
        "toplevel": args.toplevel,
        "except": args.except_names,
        "squeeze": args.squeeze,
        "seqs": args.seqs,
        "dead_code": args.dead_code,
        "unsafe": args.unsafe,
        "lift_vars": args.lift_vars,
        "no_console": args.no_console,
        "copyright": args.copyright,
        "max_line_length": args.max_line_length,
        "ascii_only": args.ascii_only,
        "inline_script": args.inline_script,
        "quote_keys": args.quote_keys,
        "beautify": args.beautify,
        # formatting
        "indent_level": args.indent_level,
        "indent_start": args.indent_start,
        "space_colon": args.space_colon,
    }


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        run_once(
            args.input,
            args.output,
            config_path=args.config,
            overrides=overrides_from_args(args),
            engine_path=args.engine_path,
        )
    except (EngineExecutionError, ValueError, OSError) as e:
        print(f"jscompact: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
