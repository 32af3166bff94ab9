from enum import Enum
import re

TERMINATOR = ';'
ARROW = '<-'
BLOCK_OPEN = '{'
BLOCK_CLOSE = '}'
COMMENT_OPEN = '/*'
COMMENT_CLOSE = '*/'
QUOTES = ("'", '"')


class StatementKind(Enum):
    DEFINE = "DEFINE"
    UNDEF = "UNDEF"
    SECTION = "SECTION"
    GLOBAL = "GLOBAL"
    EXTERN = "EXTERN"
    LABEL = "LABEL"
    CONSTANT = "CONSTANT"
    STACK_PROLOGUE = "STACK_PROLOGUE"
    STACK_EPILOGUE = "STACK_EPILOGUE"
    RETURN = "RETURN"
    COMMENT = "COMMENT"
    STRING_LITERAL = "STRING_LITERAL"
    MOVE = "MOVE"
    CALL = "CALL"
    GENERIC = "GENERIC"


KEYWORDS = {
    '$define': StatementKind.DEFINE,
    '$undef': StatementKind.UNDEF,
    '$section': StatementKind.SECTION,
    '$global': StatementKind.GLOBAL,
    '$extern': StatementKind.EXTERN,
    '$equ': StatementKind.CONSTANT,
    'label': StatementKind.LABEL,
    '$pstk': StatementKind.STACK_PROLOGUE,
    '$fstk': StatementKind.STACK_EPILOGUE,
    '$return': StatementKind.RETURN,
    'move': StatementKind.MOVE,
}

# NAME( with no space before the paren
CALL_PATTERN = re.compile(r'^[A-Za-z_.][\w.@$?]*\(')


def strip_terminator(token: str) -> str:
    if token.endswith(TERMINATOR):
        return token[:-1]
    return token


def classify_token(token: str) -> StatementKind:
    """Map a statement's leading token onto its statement shape."""
    if token.startswith(COMMENT_OPEN):
        return StatementKind.COMMENT
    if token[:1] in QUOTES:
        return StatementKind.STRING_LITERAL

    kind = KEYWORDS.get(strip_terminator(token))
    if kind is not None:
        return kind

    if CALL_PATTERN.match(token):
        return StatementKind.CALL
    return StatementKind.GENERIC
