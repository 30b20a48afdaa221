"""
Lexer for linecalc lines.

Converts the text of a single line into a flat list of tokens.
Supports:
- Number literals (digits and '.', e.g. 42, 3.14, .5)
- Identifiers (an ASCII letter followed by ASCII letters/digits)
- Line references (#N, 1-based)
- Operators + - * /, assignment '=', and parentheses

Any other character is dropped without a trace, which keeps the pipeline
total: a line always tokenizes. Strict mode raises E001 instead.
"""

from typing import List, Optional, Iterator

from .tokens import Token, TokenType, OPERATORS
from .errors import error_unexpected_character
from .numeric import NumericModel, FloatModel

DIGITS = "0123456789"


def _is_letter(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


class Lexer:
    """
    Tokenizer for one line of a document.

    Usage:
        lexer = Lexer("x = 10 * #2")
        tokens = lexer.tokenize()

    Or for streaming:
        for token in Lexer(line):
            process(token)
    """

    def __init__(self, source: str, numeric: Optional[NumericModel] = None,
                 strict: bool = False):
        self.source = source
        self.numeric = numeric or FloatModel()
        self.strict = strict
        self.pos = 0            # Current position in source

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _make_token(self, token_type: TokenType, value, start: int) -> Token:
        """Create a token spanning source[start:pos]."""
        return Token(token_type, value, self.source[start:self.pos], start + 1)

    def _scan_line_ref(self) -> Token:
        """Scan '#' followed by digits."""
        start = self.pos
        self._advance()  # consume '#'
        while self._peek() in DIGITS:
            self._advance()
        digits = self.source[start + 1:self.pos]
        # A bare '#' refers to line 0, which never resolves
        line = int(digits) if digits else 0
        return self._make_token(TokenType.LINE_REF, line, start)

    def _scan_number(self) -> Token:
        """Scan a run of digits and dots.

        The scanner does not enforce a single decimal point; a malformed
        lexeme gets a None value and is rejected by the parser.
        """
        start = self.pos
        while self._peek() in DIGITS or self._peek() == '.':
            self._advance()
        lexeme = self.source[start:self.pos]
        return self._make_token(TokenType.NUMBER, self.numeric.parse(lexeme), start)

    def _scan_identifier(self) -> Token:
        start = self.pos
        while _is_letter(self._peek()) or self._peek() in DIGITS:
            self._advance()
        lexeme = self.source[start:self.pos]
        return self._make_token(TokenType.IDENTIFIER, lexeme, start)

    def _scan_token(self) -> Optional[Token]:
        """Scan the next token, or return None at end of line."""
        while not self._is_at_end():
            ch = self._peek()

            if ch.isspace():
                self._advance()
                continue

            if ch == '#':
                return self._scan_line_ref()

            if ch in DIGITS or ch == '.':
                return self._scan_number()

            if _is_letter(ch):
                return self._scan_identifier()

            start = self.pos
            self._advance()

            if ch in OPERATORS:
                return self._make_token(TokenType.OPERATOR, ch, start)
            if ch == '=':
                return self._make_token(TokenType.ASSIGN, ch, start)
            if ch == '(':
                return self._make_token(TokenType.LPAREN, ch, start)
            if ch == ')':
                return self._make_token(TokenType.RPAREN, ch, start)

            # Unknown character
            if self.strict:
                raise error_unexpected_character(ch, start + 1)

        return None

    def tokenize(self) -> List[Token]:
        """Tokenize the entire line, returning a list of tokens."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens."""
        while True:
            token = self._scan_token()
            if token is None:
                break
            yield token


def tokenize(source: str, numeric: Optional[NumericModel] = None,
             strict: bool = False) -> List[Token]:
    """
    Convenience function to tokenize one line.

    Args:
        source: The line to tokenize
        numeric: Numeric model used to convert number literals (float by default)
        strict: Raise on unrecognized characters instead of dropping them

    Returns:
        List of tokens (possibly empty)

    Raises:
        LexerError: Only in strict mode
    """
    return Lexer(source, numeric, strict).tokenize()
