from .errors import HASMError, StructuralError, InvalidLiteral, UnexpectedEndOfInput

__all__ = ['HASMError', 'StructuralError', 'InvalidLiteral', 'UnexpectedEndOfInput']
