#!/usr/bin/env python3
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .core.diagnostics import DiagnosticEngine
from .core.translator import Translator
from .utils.errors import HASMError
from .utils.formatter import formatter

_TRUTHY = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


class CompilerConfig:
    def __init__(self):
        self.verbose = False
        self.minimal_ui = False
        self.inherit_macros = False
        self.strict_braces = False
        self.pretty = False
        self.warnings_as_errors = False
        self.output_dir = "output"

    @classmethod
    def from_env(cls) -> 'CompilerConfig':
        """Build a config honoring HASM_* environment overrides"""
        config = cls()
        config.verbose = _env_flag('HASM_VERBOSE', config.verbose)
        config.minimal_ui = _env_flag('HASM_MINIMAL_UI', config.minimal_ui)
        config.strict_braces = _env_flag('HASM_STRICT', config.strict_braces)
        config.inherit_macros = _env_flag('HASM_INHERIT_MACROS', config.inherit_macros)
        return config

    def update(self, **options) -> 'CompilerConfig':
        for key, value in options.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown compiler option '{key}'")
            setattr(self, key, value)
        return self


class HASMCompiler:
    def __init__(self, config: Optional[CompilerConfig] = None):
        self.config = config or CompilerConfig()
        self.diagnostics = DiagnosticEngine()
        self.logger = logging.getLogger(__name__)

    def compile(self, source: str, filename: str = "<stdin>") -> str:
        """Translate source text and return the assembly.

        Raises HASMError on any fatal translation problem; no partial
        output is returned in that case.
        """
        self.logger.debug("translating %s (%d bytes)", filename, len(source))
        translator = Translator(
            source,
            inherit_macros=self.config.inherit_macros,
            strict_braces=self.config.strict_braces,
            scope=filename,
        )
        assembly = translator.translate()
        self.diagnostics = translator.diagnostics

        for diag in self.diagnostics.warnings():
            self.logger.debug(diag.format())

        if self.config.warnings_as_errors and self.diagnostics.has_warnings():
            raise HASMError(
                f"{self.diagnostics.warning_count} warning(s) treated as errors",
                context=self.diagnostics.warnings()[0].format(),
            )

        if self.config.pretty:
            assembly = formatter.format_assembly(assembly)

        self.logger.debug("generated %d lines", assembly.count('\n'))
        return assembly

    def compile_file(self, filepath: str) -> str:
        """Read a source file and translate it"""
        with open(filepath, 'r', encoding='utf-8') as f:
            source = f.read()
        return self.compile(source, filepath)

    def default_output_path(self, input_file: str) -> Path:
        return Path(self.config.output_dir) / (Path(input_file).stem + '.asm')


def compile_string(source: str, **options) -> str:
    config = CompilerConfig().update(**options)
    return HASMCompiler(config).compile(source, '<string>')


def compile_file(filepath: str, **options) -> str:
    config = CompilerConfig().update(**options)
    return HASMCompiler(config).compile_file(filepath)


def write_output(assembly: str, output_file: Optional[str] = None):
    """Hand translated assembly to its sink: a file, or stdout when None"""
    if output_file is None:
        sys.stdout.write(assembly)
        sys.stdout.flush()
        return
    path = Path(output_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(assembly, encoding='utf-8')
