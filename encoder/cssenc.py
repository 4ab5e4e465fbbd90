#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from css_context import EncoderContext, env_verbosity, level_from_verbosity
from css_encoder import CssEncoder
from css_errors import CssEncodingError
from css_logger import log_debug, log_error, log_info, log_stage


def build_encoder_context(args: argparse.Namespace) -> EncoderContext:
    """Build an EncoderContext from command-line arguments."""
    verbosity = getattr(args, 'verbosity', None)
    if verbosity is None:
        verbosity = env_verbosity()
    return EncoderContext(
        log_rich_format=getattr(args, 'log', False),
        log_level=level_from_verbosity(verbosity),
    )


def _read_inputs(args: argparse.Namespace, context: EncoderContext) -> List[Tuple[str, str]]:
    """Collect (label, text) pairs from positional texts, --input, or stdin."""
    if args.texts:
        return [(f"argument {n}", text) for n, text in enumerate(args.texts, start=1)]
    if getattr(args, 'input', None):
        path = Path(args.input)
        log_info(context, f"Reading input from '{path}'")
        return [(str(path), path.read_text(encoding="utf-8"))]
    return [("<stdin>", sys.stdin.read())]


def _write_output(args: argparse.Namespace, text: str) -> None:
    if getattr(args, 'output', None):
        Path(args.output).write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def cmd_encode(args: argparse.Namespace) -> int:
    """Encode inputs and write the CSS-escaped result."""
    context = build_encoder_context(args)
    encoder = CssEncoder(context=context)
    try:
        inputs = _read_inputs(args, context)
    except OSError as e:
        log_error(context, f"cannot read input: {e}")
        return 1

    parts: List[str] = []
    for label, text in inputs:
        log_stage(context, "Encoding", label)
        try:
            encoded = encoder.encode(text)
        except CssEncodingError as e:
            log_error(context, f"{label}: error: {e.format()}")
            return 1
        log_debug(context, f"{label}: encoded {len(text)} character(s) into {len(encoded)}")
        parts.append(encoded)

    if args.texts:
        output = "".join(p + "\n" for p in parts)
    else:
        output = parts[0]
    try:
        _write_output(args, output)
    except OSError as e:
        log_error(context, f"cannot write output: {e}")
        return 1
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Validate inputs without writing encoded output."""
    context = build_encoder_context(args)
    encoder = CssEncoder(context=context)
    try:
        inputs = _read_inputs(args, context)
    except OSError as e:
        log_error(context, f"cannot read input: {e}")
        return 1

    failures = 0
    for label, text in inputs:
        log_stage(context, "Checking", label)
        result = encoder.try_encode(text)
        if not result.ok:
            failures += 1
            log_error(context, f"{label}: error: {result.error.format()}")
    log_info(context, f"Checked {len(inputs)} input(s), {failures} invalid")
    return 1 if failures else 0


def cmd_table(args: argparse.Namespace) -> int:
    """Dump the CSS escape table."""
    context = build_encoder_context(args)
    table = CssEncoder(context=context).table.get(context)
    for code_point in range(len(table)):
        if table.is_safe(code_point):
            print(f"0x{code_point:02X} SAFE")
        elif not args.safe_only:
            print(f"0x{code_point:02X} {table.lookup(code_point)}")
    return 0


def _add_texts_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("texts", nargs="*", help="Texts to process (default: --input file or stdin)")
    parser.add_argument("--input", "-i", help="Read input from a UTF-8 file")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="cssenc", description="CSS encoder for untrusted text")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=None,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG (default: $CSSENC_VERBOSITY)")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")

    ###########################
    # encode command
    ###########################
    p_encode = subparsers.add_parser("encode", help="CSS-encode text", aliases=["enc"])
    _add_texts_arg(p_encode)
    p_encode.add_argument("--output", "-o", help="Output file (default: stdout)")
    p_encode.set_defaults(func=cmd_encode)

    ###########################
    # check command
    ###########################
    p_check = subparsers.add_parser("check", help="Report inputs that cannot be encoded", aliases=["validate"])
    _add_texts_arg(p_check)
    p_check.set_defaults(func=cmd_check)

    ###########################
    # table command
    ###########################
    p_table = subparsers.add_parser("table", help="Dump the escape table", aliases=["safelist"])
    p_table.add_argument("--safe-only", "-s", action="store_true",
                         help="Only list code points written unescaped")
    p_table.set_defaults(func=cmd_table)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
