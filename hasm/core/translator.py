"""
Recursive translator from HASM source to NASM style assembly.

Each invocation scans its own token stream once, left to right. Nested
``$section`` and ``label`` blocks are extracted as text and handed to a
fresh child translator, whose finished lines are spliced into the parent's
output at the point of delegation. Every invocation owns its macro table;
a child only sees the parent's macros when ``inherit_macros`` is set, and
then only as a copy.
"""
import logging
from typing import Callable, Dict, List, Optional

from .diagnostics import DiagnosticEngine
from .lexer import TokenStream
from .macros import MacroTable
from .numbers import looks_numeric, normalize_number
from .tokens import (
    ARROW, BLOCK_OPEN, BLOCK_CLOSE, COMMENT_CLOSE, TERMINATOR,
    StatementKind, classify_token, strip_terminator,
)
from ..utils.errors import StructuralError

STACK_PROLOGUE = ('push rbp', 'mov rbp, rsp')
STACK_EPILOGUE = ('mov rsp, rbp', 'pop rbp')
RETURN = 'ret'


def format_operand(operand: str) -> str:
    """Render a resolved operand: &x becomes [x], numbers go to base 10"""
    if operand.startswith('&'):
        return f"[{operand[1:]}]"
    if looks_numeric(operand):
        return normalize_number(operand)
    return operand


def clean_line(line: str) -> str:
    line = line.replace(BLOCK_OPEN, '').replace(BLOCK_CLOSE, '').rstrip()
    if line.endswith(TERMINATOR):
        line = line[:-1].rstrip()
    return line


class Translator:
    def __init__(self, source: str, depth: int = 0, macros: Optional[MacroTable] = None,
                 inherit_macros: bool = False, strict_braces: bool = False,
                 scope: str = "<root>"):
        self.stream = TokenStream(source)
        self.depth = depth
        self.macros = macros if macros is not None else MacroTable()
        self.inherit_macros = inherit_macros
        self.strict_braces = strict_braces
        self.scope = scope
        self.diagnostics = DiagnosticEngine()
        self.logger = logging.getLogger(__name__)

        self.lines: List[str] = []
        self.partial = ""

        self._handlers: Dict[StatementKind, Callable[[str], None]] = {
            StatementKind.DEFINE: self._define,
            StatementKind.UNDEF: self._undef,
            StatementKind.SECTION: self._section,
            StatementKind.GLOBAL: self._global,
            StatementKind.EXTERN: self._extern,
            StatementKind.LABEL: self._label,
            StatementKind.CONSTANT: self._constant,
            StatementKind.STACK_PROLOGUE: self._stack_prologue,
            StatementKind.STACK_EPILOGUE: self._stack_epilogue,
            StatementKind.RETURN: self._return,
            StatementKind.COMMENT: self._comment,
            StatementKind.STRING_LITERAL: self._string_literal,
            StatementKind.MOVE: self._move,
            StatementKind.CALL: self._call,
            StatementKind.GENERIC: self._generic,
        }

    def translate(self) -> str:
        lines = self.translate_lines()
        return '\n'.join(lines) + '\n' if lines else ''

    def translate_lines(self) -> List[str]:
        self.logger.debug("%sentering %s (%d tokens)", '  ' * self.depth, self.scope, len(self.stream))
        while self.stream.has_more():
            token = self.stream.next()
            kind = classify_token(token)
            if kind is StatementKind.GENERIC:
                # a macro may expand to a statement keyword
                resolved = self.macros.resolve(token)
                resolved_kind = classify_token(resolved)
                if resolved_kind is not StatementKind.GENERIC:
                    token, kind = resolved, resolved_kind
            self._handlers[kind](token)
        self._close_line()
        return self.lines

    # -- output buffer -------------------------------------------------

    def _append(self, text: str):
        self.partial += text

    def _close_line(self, text: str = ""):
        line = clean_line(self.partial + text)
        self.partial = ""
        if line:
            self.lines.append(line)

    def _emit_line(self, text: str):
        if self.partial.strip():
            self._close_line()
        self.partial = ""
        self._close_line(text)

    def _append_child(self, child_lines: List[str]):
        if not child_lines:
            return
        first, rest = child_lines[0], child_lines[1:]
        if self.partial.strip():
            self.lines.append(self.partial + first)
        else:
            self.lines.append(first)
        self.partial = ""
        self.lines.extend(rest)

    def _translate_block(self, scope: str):
        block = self.stream.extract_block(strict=self.strict_braces)
        if not self.stream.last_block_closed:
            self.diagnostics.warning("block reached end of input without a closing '}'", scope)

        child = Translator(
            block,
            depth=self.depth + 1,
            macros=self.macros.copy() if self.inherit_macros else None,
            inherit_macros=self.inherit_macros,
            strict_braces=self.strict_braces,
            scope=scope,
        )
        child_lines = child.translate_lines()
        self.diagnostics.extend(child.diagnostics)
        self._append_child(child_lines)

    # -- statements ----------------------------------------------------

    def _name_operand(self, expected: str) -> str:
        return self.macros.resolve(strip_terminator(self.stream.next(expected)))

    def _define(self, token: str):
        name = strip_terminator(self.stream.next("macro name after $define"))
        value = strip_terminator(self.stream.next(f"value for macro '{name}'"))
        self.macros.define(name, value)
        self.logger.debug("%sdefine %s = %s", '  ' * self.depth, name, value)

    def _undef(self, token: str):
        name = strip_terminator(self.stream.next("macro name after $undef"))
        self.macros.undef(name)

    def _section(self, token: str):
        kind = self._name_operand("section kind").lower()
        self._emit_line(f"section .{kind}")
        self._translate_block(f"section .{kind}")

    def _global(self, token: str):
        name = self._name_operand("symbol after $global")
        self._emit_line(f"global {name}")

    def _extern(self, token: str):
        name = self._name_operand("symbol after $extern")
        self._emit_line(f"extern {name}")

    def _label(self, token: str):
        name = self._name_operand("label name")
        if self.stream.peek() == BLOCK_OPEN and self.stream.peek(1) == 'equ':
            # constant label: NAME equ VALUE on one line
            if self.partial.strip():
                self._close_line()
            self.partial = f"{name} "
        else:
            self._emit_line(f"{name}:")
        self._translate_block(f"label {name}")

    def _constant(self, token: str):
        name = self._name_operand("constant name after $equ")
        value = self.macros.resolve(strip_terminator(self.stream.next(f"value for constant '{name}'")))
        self._emit_line(f"{name} equ {format_operand(value)}")

    def _stack_prologue(self, token: str):
        for instruction in STACK_PROLOGUE:
            self._emit_line(instruction)

    def _stack_epilogue(self, token: str):
        for instruction in STACK_EPILOGUE:
            self._emit_line(instruction)

    def _return(self, token: str):
        self._emit_line(RETURN)

    def _comment(self, token: str):
        if len(token) >= 4 and token.endswith(COMMENT_CLOSE):
            return
        while not self.stream.next("'*/' closing a block comment").endswith(COMMENT_CLOSE):
            pass

    def _string_literal(self, token: str):
        quote = token[0]
        parts = [token]
        if token.count(quote) < 2:
            while True:
                part = self.stream.next(f"closing {quote} of string literal")
                parts.append(part)
                if quote in part:
                    break
        literal = ' '.join(parts)

        if literal.endswith(TERMINATOR):
            self._close_line(literal)
        else:
            self._append(f"{literal} ")

    def _move(self, token: str):
        destination = self.stream.next("destination of move")
        arrow = self.stream.next("'<-' in move")
        source = self.stream.next("source of move")
        if arrow != ARROW:
            self.diagnostics.warning(f"expected '{ARROW}' in move, found '{arrow}'", self.scope)

        destination = self.macros.resolve(destination)
        source = self.macros.resolve(strip_terminator(source))
        self._emit_line(f"mov {destination}, {format_operand(source)}")

    def _call(self, token: str):
        text = token
        while ')' not in text:
            text += ' ' + self.stream.next(f"closing ')' of call '{token}'")

        name, _, rest = text.partition('(')
        arguments_text, _, trailing = rest.partition(')')
        arguments = [arg.strip() for arg in arguments_text.split(',') if arg.strip()]

        # last argument is pushed first
        for argument in reversed(arguments):
            self._emit_line(f"push {format_operand(self.macros.resolve(argument))}")
        self._emit_line(f"call {self.macros.resolve(name)}")

        trailing = strip_terminator(trailing)
        if trailing:
            self._generic(trailing)

    def _generic(self, token: str):
        if token in (BLOCK_OPEN, BLOCK_CLOSE):
            if self.strict_braces:
                raise StructuralError(f"Unmatched '{token}'", context=self.scope)
            self.diagnostics.warning(f"stray '{token}' ignored", self.scope)
            return
        if token[:1] == '$' and token[1:2].isalpha():
            self.diagnostics.warning(f"unknown directive '{token}' passed through", self.scope)

        token = self.macros.resolve(token)

        if self.stream.peek() == ARROW:
            self.stream.next()
            self._append(f"{token}, ")
            return

        core = strip_terminator(token)
        piece = format_operand(core) if core else core
        if core != token:
            self._close_line(piece)
        else:
            self._append(f"{piece} ")


def translate(source: str, inherit_macros: bool = False, strict_braces: bool = False) -> str:
    """Translate HASM source text into assembly text"""
    return Translator(source, inherit_macros=inherit_macros, strict_braces=strict_braces).translate()
