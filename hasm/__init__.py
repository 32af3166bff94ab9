"""HASM: a small block-structured assembly DSL translated to NASM syntax."""
from .compiler import CompilerConfig, HASMCompiler, compile_string, compile_file, write_output
from .core.translator import translate
from .utils.errors import HASMError, StructuralError, InvalidLiteral, UnexpectedEndOfInput

__version__ = "0.1.0"

__all__ = [
    'CompilerConfig', 'HASMCompiler', 'compile_string', 'compile_file', 'write_output',
    'translate', 'HASMError', 'StructuralError', 'InvalidLiteral', 'UnexpectedEndOfInput',
]
