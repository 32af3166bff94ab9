#!/usr/bin/env python3


class HASMError(Exception):
    """Base class for HASM translation errors"""

    def __init__(self, message: str, context: str = ""):
        self.message = message
        self.context = context
        super().__init__(self._format_error())

    def _format_error(self) -> str:
        """Format error message with context"""
        if self.context:
            return f"{self.message}\n  near: {self.context}"
        return self.message


class StructuralError(HASMError):
    """A block opener is missing or braces do not balance"""


class InvalidLiteral(HASMError):
    """A numeric token does not parse under its declared base"""


class UnexpectedEndOfInput(HASMError):
    """Input ended before a statement's follow-on tokens"""
