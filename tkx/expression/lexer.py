"""
Lexer for template binding expressions.

Splits an expression into meaningful tokens:
- Keywords (true, false, null, undefined, this, typeof)
- Identifiers (property, pipe and function names)
- String, number and template literals
- Operators and punctuation
- Whitespace (ignored)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Union


class ExpressionParseError(ValueError):
    """Syntax error in a binding expression."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


@dataclass
class Token:
    """
    Expression token.

    Attributes:
        type: Token type (KEYWORD, IDENTIFIER, STRING, NUMBER, TEMPLATE, OPERATOR, SYMBOL, EOF)
        value: Decoded value (unescaped text for strings, int/float for numbers)
        position: Offset in the source expression
    """
    type: str
    value: Union[str, int, float]
    position: int

    def __repr__(self):
        return f"Token({self.type}, {self.value!r}, pos={self.position})"


_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_ESCAPE_RE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)


def unescape_string(body: str) -> str:
    """Resolve JavaScript-style backslash escapes in a quoted string body."""
    def repl(m: re.Match) -> str:
        esc = m.group(1)
        if esc.startswith("u") and len(esc) == 5:
            return chr(int(esc[1:], 16))
        return _ESCAPES.get(esc, esc)
    return _ESCAPE_RE.sub(repl, body)


class ExpressionLexer:
    """
    Tokenizer for binding expressions.

    Multi-character operators are listed before their prefixes so the
    longest operator always wins.
    """

    # Token specs: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        (r"'(?:[^'\\]|\\.)*'", 'STRING', False),
        (r'"(?:[^"\\]|\\.)*"', 'STRING', False),
        (r'`(?:[^`\\]|\\.)*`', 'TEMPLATE', False),

        (r'(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?', 'NUMBER', False),

        (r'[A-Za-z_$][\w$]*', 'IDENTIFIER', False),

        # optional chaining is not an operator when followed by a digit (a?.5:1)
        (r'\?\.(?!\d)', 'OPERATOR', False),
        (r'===|!==|==|!=|<=|>=|&&|\|\||\?\?|\*\*', 'OPERATOR', False),
        (r'[-+*/%<>!?|=&]', 'OPERATOR', False),

        (r'[()\[\]{},:.;]', 'SYMBOL', False),

        # Unterminated strings and everything else
        (r'.', 'UNKNOWN', False),
    ]

    KEYWORDS = {
        'true', 'false', 'null', 'undefined', 'this', 'typeof', 'void',
    }

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Split an expression into tokens.

        Args:
            text: Expression source

        Returns:
            Token list terminated by EOF

        Raises:
            ExpressionParseError: On an unknown character or an unterminated string
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                raw = match.group(0)
                if not ignore:
                    tokens.append(self._make_token(token_type, raw, position))
                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens

    def _make_token(self, token_type: str, raw: str, position: int) -> Token:
        if token_type == 'UNKNOWN':
            if raw in ("'", '"', '`'):
                raise ExpressionParseError("Unterminated quote", position)
            raise ExpressionParseError(f"Unexpected character '{raw}'", position)

        if token_type == 'STRING':
            return Token(type='STRING', value=unescape_string(raw[1:-1]), position=position)

        if token_type == 'TEMPLATE':
            # keep the raw body: the parser splits it on ${...}
            return Token(type='TEMPLATE', value=raw[1:-1], position=position)

        if token_type == 'NUMBER':
            is_float = any(c in raw for c in ".eE")
            return Token(type='NUMBER', value=float(raw) if is_float else int(raw), position=position)

        if token_type == 'IDENTIFIER' and raw in self.KEYWORDS:
            return Token(type='KEYWORD', value=raw, position=position)

        return Token(type=token_type, value=raw, position=position)


__all__ = ["ExpressionLexer", "ExpressionParseError", "Token", "unescape_string"]
