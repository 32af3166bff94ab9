"""
Token stream over DSL text.

Braces are isolated as standalone tokens, everything else is split on
whitespace. Tokens are plain strings and carry no source location.
"""
import logging
from typing import List, Optional

from .tokens import BLOCK_OPEN, BLOCK_CLOSE
from ..utils.errors import StructuralError, UnexpectedEndOfInput

logger = logging.getLogger(__name__)


def tokenize(text: str) -> List[str]:
    spaced = text.replace(BLOCK_OPEN, f' {BLOCK_OPEN} ').replace(BLOCK_CLOSE, f' {BLOCK_CLOSE} ')
    return spaced.split()


class TokenStream:
    def __init__(self, text: str):
        self.tokens: List[str] = tokenize(text)
        self.position = 0
        self.last_block_closed = True

    def __len__(self) -> int:
        return len(self.tokens)

    def has_more(self) -> bool:
        return self.position < len(self.tokens)

    def peek(self, k: int = 0) -> Optional[str]:
        """Return the token k places ahead of the cursor without consuming it"""
        index = self.position + k
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return None

    def next_or_none(self) -> Optional[str]:
        if not self.has_more():
            return None
        token = self.tokens[self.position]
        self.position += 1
        return token

    def next(self, expected: str = "token") -> str:
        """Consume the next token, failing if the stream is exhausted"""
        token = self.next_or_none()
        if token is None:
            raise UnexpectedEndOfInput(f"Unexpected end of input: expected {expected}")
        return token

    def extract_block(self, strict: bool = False) -> str:
        """Consume a brace-delimited block and return its inner tokens as text.

        The cursor must sit on the opening brace. The matching closing brace
        is consumed but not returned. Hitting the end of input first returns
        what was collected unless ``strict`` is set.
        """
        opener = self.next_or_none()
        if opener != BLOCK_OPEN:
            raise StructuralError("Expected '{' to start a block", context=opener or "<end of input>")

        depth = 0
        block: List[str] = []
        closed = False
        while self.has_more():
            token = self.next()
            if token == BLOCK_OPEN:
                depth += 1
            elif token == BLOCK_CLOSE:
                depth -= 1
            if depth < 0:
                closed = True
                break
            block.append(token)

        self.last_block_closed = closed
        if not closed:
            if strict:
                raise StructuralError("Block is missing its closing '}'")
            logger.debug("block ran to end of input without a closing brace")

        return ' '.join(block)
