#!/usr/bin/env python3
import argparse
import logging
import os
import sys

from rich.logging import RichHandler

from hasm.compiler import CompilerConfig, HASMCompiler, write_output
from hasm.utils import term
from hasm.utils.errors import HASMError
from hasm.utils.term import print_stage, print_error, print_success, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='hasmc', description='Translate HASM source into NASM assembly')
    parser.add_argument('input', help='HASM source file')
    parser.add_argument('-o', '--output', help='Output file (default: output/<name>.asm)')
    parser.add_argument('--stdout', action='store_true', help='Write assembly to stdout')
    parser.add_argument('--pretty', action='store_true', help='Indent instructions and space out sections')
    parser.add_argument('--strict', action='store_true', help='Treat unbalanced braces as errors')
    parser.add_argument('--inherit-macros', action='store_true',
                        help='Let nested blocks see the macros of their enclosing block')
    parser.add_argument('-W', '--warnings-as-errors', action='store_true', help='Fail on any warning')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('--minimal', action='store_true', help='Plain, uncoloured output')
    return parser


def configure(args) -> CompilerConfig:
    config = CompilerConfig.from_env()
    config.verbose = config.verbose or args.verbose
    config.minimal_ui = config.minimal_ui or args.minimal
    config.strict_braces = config.strict_braces or args.strict
    config.inherit_macros = config.inherit_macros or args.inherit_macros
    config.pretty = args.pretty
    config.warnings_as_errors = args.warnings_as_errors
    return config


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = configure(args)
    term.MINIMAL = config.minimal_ui

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=term.err_console, show_path=False)],
    )

    if not os.path.isfile(args.input):
        print_error(f"File not found: {args.input}")
        return 1

    compiler = HASMCompiler(config)
    output_file = None if args.stdout else (args.output or str(compiler.default_output_path(args.input)))
    # keep stdout clean for the assembly itself
    quiet = output_file is None

    try:
        if not quiet:
            print_stage(1, 2, f"Translating {args.input}")
        assembly = compiler.compile_file(args.input)
    except HASMError as e:
        print_error(str(e))
        return 1
    except OSError as e:
        print_error(f"Cannot read {args.input}: {e}")
        return 1

    if not quiet:
        for diag in compiler.diagnostics.warnings():
            print_warning(diag.format())
        print_stage(2, 2, f"Writing {output_file}")

    write_output(assembly, output_file)

    if not quiet:
        print_success(f"Assembly written to: {output_file}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
