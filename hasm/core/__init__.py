from .lexer import TokenStream, tokenize
from .macros import MacroTable
from .numbers import parse_number, looks_numeric
from .tokens import StatementKind, classify_token
from .translator import Translator, translate

__all__ = [
    'TokenStream', 'tokenize', 'MacroTable', 'parse_number', 'looks_numeric',
    'StatementKind', 'classify_token', 'Translator', 'translate',
]
