from typing import Dict, Iterator, Optional

from .tokens import TERMINATOR


class MacroTable:
    """Name to replacement text mapping for one translator invocation.

    Lookups are exact-token: a name is only replaced when it is the whole
    token, optionally wrapped as an ``&`` memory operand or followed by a
    statement terminator or argument comma.
    """

    def __init__(self, definitions: Optional[Dict[str, str]] = None):
        self._definitions: Dict[str, str] = dict(definitions or {})

    def define(self, name: str, value: str):
        self._definitions[name] = value

    def undef(self, name: str):
        self._definitions.pop(name, None)

    def lookup(self, name: str) -> Optional[str]:
        return self._definitions.get(name)

    def copy(self) -> 'MacroTable':
        return MacroTable(self._definitions)

    def __contains__(self, name: str) -> bool:
        return name in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[str]:
        return iter(self._definitions)

    def resolve(self, token: str) -> str:
        """Substitute one level of macro replacement into a token"""
        if token in self._definitions:
            return self._definitions[token]

        suffix = ''
        core = token
        while core and core[-1] in (TERMINATOR, ','):
            suffix = core[-1] + suffix
            core = core[:-1]

        prefix = ''
        if core.startswith('&'):
            prefix = '&'
            core = core[1:]

        if (prefix or suffix) and core in self._definitions:
            return f"{prefix}{self._definitions[core]}{suffix}"
        return token
