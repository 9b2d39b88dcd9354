"""
Recursive descent parser for template binding expressions.

Builds an abstract syntax tree (AST) from a token sequence.
Operator precedence follows Angular template expressions.

Grammar:
pipe           → conditional ("|" IDENTIFIER (":" conditional)*)*
conditional    → or ("?" pipe ":" pipe)?
or             → and ("||" and)*
and            → nullish ("&&" nullish)*
nullish        → equality ("??" equality)*
equality       → relational (("==" | "!=" | "===" | "!==") relational)*
relational     → additive (("<" | ">" | "<=" | ">=") additive)*
additive       → multiplicative (("+" | "-") multiplicative)*
multiplicative → exponent (("*" | "/" | "%") exponent)*
exponent       → prefix ("**" exponent)?
prefix         → ("!" | "-" | "+" | "typeof" | "void") prefix | postfix
postfix        → primary ("." IDENTIFIER | "?." IDENTIFIER | "[" pipe "]"
                 | "?." "[" pipe "]" | "(" arguments ")" | "?." "(" arguments ")" | "!")*
primary        → "(" pipe ")" | literal | array | map | TEMPLATE | IDENTIFIER
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .ast import (
    AST,
    ASTWithSource,
    Binary,
    BindingPipe,
    Call,
    Conditional,
    EmptyExpr,
    ImplicitReceiver,
    Interpolation,
    KeyedRead,
    LiteralArray,
    LiteralMap,
    LiteralMapKey,
    LiteralPrimitive,
    NonNullAssert,
    PrefixNot,
    PropertyRead,
    SafeCall,
    SafeKeyedRead,
    SafePropertyRead,
    TemplateLiteral,
    ThisReceiver,
    TypeofExpression,
    Unary,
)
from .lexer import ExpressionLexer, ExpressionParseError, Token, unescape_string

INTERPOLATION_START = "{{"
INTERPOLATION_END = "}}"

_BINARY_LEVELS = [
    {"||"},
    {"&&"},
    {"??"},
    {"==", "!=", "===", "!=="},
    {"<", ">", "<=", ">="},
    {"+", "-"},
    {"*", "/", "%"},
]


class ExpressionParser:
    """
    Parser for bindings (``[key]="..."``) and interpolations (``a {{ b }} c``).

    Instances are reusable; every public call resets the token state.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0
        self._offset = 0

    # ---- Public API ----

    def parse_binding(self, text: str) -> ASTWithSource:
        """
        Parse a property binding expression.

        An empty or blank binding yields ``EmptyExpr``.

        Raises:
            ExpressionParseError: On a syntax error
        """
        return ASTWithSource(ast=self._parse_standalone(text, 0), source=text)

    def parse_interpolation(self, text: str) -> Optional[ASTWithSource]:
        """
        Parse text with ``{{ }}`` interpolations.

        Returns:
            ``ASTWithSource`` wrapping an ``Interpolation``, or ``None``
            when the text holds no complete interpolation

        Raises:
            ExpressionParseError: On a blank or malformed interpolated expression
        """
        parts = split_interpolation(text)
        if parts is None:
            return None
        strings, chunks = parts

        expressions: List[AST] = []
        for chunk, offset in chunks:
            if not chunk.strip():
                raise ExpressionParseError("Blank expressions are not allowed in interpolated strings", offset)
            expressions.append(self._parse_standalone(chunk, offset))

        return ASTWithSource(
            ast=Interpolation(strings=tuple(strings), expressions=tuple(expressions)),
            source=text,
        )

    # ---- Entry points ----

    def _parse_standalone(self, text: str, offset: int) -> AST:
        saved = (self._tokens, self._position, self._offset)
        try:
            self._tokens = self._tokenize(text, offset)
            self._position = 0
            self._offset = offset

            if self._is_at_end():
                return EmptyExpr()

            result = self._parse_pipe()
            if not self._is_at_end():
                raise self._error(f"Unexpected token '{self._current_token().value}'")
            return result
        finally:
            self._tokens, self._position, self._offset = saved

    def _tokenize(self, text: str, offset: int) -> List[Token]:
        try:
            return self.lexer.tokenize(text)
        except ExpressionParseError as e:
            raise ExpressionParseError(e.message, e.position + offset) from None

    # ---- Grammar rules ----

    def _parse_pipe(self) -> AST:
        result = self._parse_conditional()

        while self._match_operator("|"):
            name_token = self._current_token()
            if name_token.type not in ("IDENTIFIER", "KEYWORD"):
                raise self._error("Expected pipe name after '|'")
            self._advance()

            args: List[AST] = []
            while self._match_symbol(":"):
                args.append(self._parse_conditional())

            result = BindingPipe(exp=result, name=str(name_token.value), args=tuple(args))

        return result

    def _parse_conditional(self) -> AST:
        condition = self._parse_binary(0)

        if self._match_operator("?"):
            true_exp = self._parse_pipe()
            if not self._match_symbol(":"):
                raise self._error("Conditional expression requires all 3 expressions")
            false_exp = self._parse_pipe()
            return Conditional(condition=condition, true_exp=true_exp, false_exp=false_exp)

        return condition

    def _parse_binary(self, level: int) -> AST:
        """Left-associative binary operators, one precedence level per call depth."""
        if level >= len(_BINARY_LEVELS):
            return self._parse_exponent()

        operators = _BINARY_LEVELS[level]
        left = self._parse_binary(level + 1)

        while True:
            current = self._current_token()
            if current.type != "OPERATOR" or current.value not in operators:
                return left
            self._advance()
            right = self._parse_binary(level + 1)
            left = Binary(operation=str(current.value), left=left, right=right)

    def _parse_exponent(self) -> AST:
        left = self._parse_prefix()
        if self._match_operator("**"):
            # right associative
            return Binary(operation="**", left=left, right=self._parse_exponent())
        return left

    def _parse_prefix(self) -> AST:
        if self._match_operator("!"):
            return PrefixNot(expression=self._parse_prefix())
        if self._match_operator("-"):
            return Unary(operator="-", expr=self._parse_prefix())
        if self._match_operator("+"):
            return Unary(operator="+", expr=self._parse_prefix())
        if self._match_keyword("typeof"):
            return TypeofExpression(expression=self._parse_prefix())
        if self._match_keyword("void"):
            return Unary(operator="void", expr=self._parse_prefix())

        return self._parse_postfix()

    def _parse_postfix(self) -> AST:
        result = self._parse_primary()

        while True:
            if self._match_symbol("."):
                result = PropertyRead(receiver=result, name=self._consume_name("Expected identifier for property access"))
            elif self._match_operator("?."):
                if self._match_symbol("["):
                    result = SafeKeyedRead(receiver=result, key=self._parse_keyed_tail())
                elif self._match_symbol("("):
                    result = SafeCall(receiver=result, args=self._parse_call_arguments())
                else:
                    result = SafePropertyRead(receiver=result, name=self._consume_name("Expected identifier after '?.'"))
            elif self._match_symbol("["):
                result = KeyedRead(receiver=result, key=self._parse_keyed_tail())
            elif self._match_symbol("("):
                result = Call(receiver=result, args=self._parse_call_arguments())
            elif self._match_operator("!"):
                result = NonNullAssert(expression=result)
            else:
                return result

    def _parse_primary(self) -> AST:
        current = self._current_token()

        if self._match_symbol("("):
            # grouping does not produce a node of its own
            expr = self._parse_pipe()
            if not self._match_symbol(")"):
                raise self._error("Expected ')' after grouped expression")
            return expr

        if current.type == "KEYWORD":
            self._advance()
            if current.value == "null":
                return LiteralPrimitive(value=None, kind="null")
            if current.value == "undefined":
                return LiteralPrimitive(value=None, kind="undefined")
            if current.value == "true":
                return LiteralPrimitive(value=True)
            if current.value == "false":
                return LiteralPrimitive(value=False)
            if current.value == "this":
                return ThisReceiver()
            raise ExpressionParseError(f"Unexpected keyword '{current.value}'", self._offset + current.position)

        if current.type in ("STRING", "NUMBER"):
            self._advance()
            return LiteralPrimitive(value=current.value)

        if current.type == "TEMPLATE":
            self._advance()
            return self._parse_template_literal(str(current.value), self._offset + current.position + 1)

        if self._match_symbol("["):
            return LiteralArray(expressions=tuple(self._parse_sequence("]")))

        if self._match_symbol("{"):
            return self._parse_literal_map()

        if current.type == "IDENTIFIER":
            self._advance()
            return PropertyRead(receiver=ImplicitReceiver(), name=str(current.value))

        if current.type == "EOF":
            raise self._error("Unexpected end of expression")
        raise self._error(f"Unexpected token '{current.value}'")

    def _parse_literal_map(self) -> LiteralMap:
        keys: List[LiteralMapKey] = []
        values: List[AST] = []

        if not self._match_symbol("}"):
            while True:
                key_token = self._current_token()
                if key_token.type not in ("IDENTIFIER", "KEYWORD", "STRING"):
                    raise self._error("Expected identifier or string as map key")
                self._advance()
                quoted = key_token.type == "STRING"
                keys.append(LiteralMapKey(key=str(key_token.value), quoted=quoted))

                if self._match_symbol(":"):
                    values.append(self._parse_pipe())
                elif quoted:
                    raise self._error("Expected ':' after quoted map key")
                else:
                    # shorthand {a} reads a from the component
                    values.append(PropertyRead(receiver=ImplicitReceiver(), name=str(key_token.value)))

                if self._match_symbol(","):
                    continue
                if self._match_symbol("}"):
                    break
                raise self._error("Expected ',' or '}' in map literal")

        return LiteralMap(keys=tuple(keys), values=tuple(values))

    def _parse_template_literal(self, body: str, offset: int) -> TemplateLiteral:
        elements: List[str] = []
        expressions: List[AST] = []

        start = 0
        i = 0
        while i < len(body):
            if body[i] == "\\":
                i += 2
                continue
            if body.startswith("${", i):
                end = _find_closing_brace(body, i + 2)
                if end < 0:
                    raise ExpressionParseError("Unterminated template literal substitution", offset + i)
                elements.append(unescape_string(body[start:i]))
                expressions.append(self._parse_standalone(body[i + 2:end], offset + i + 2))
                i = start = end + 1
                continue
            i += 1
        elements.append(unescape_string(body[start:]))

        return TemplateLiteral(elements=tuple(elements), expressions=tuple(expressions))

    def _parse_keyed_tail(self) -> AST:
        key = self._parse_pipe()
        if not self._match_symbol("]"):
            raise self._error("Expected ']' after key")
        return key

    def _parse_call_arguments(self) -> Tuple[AST, ...]:
        return tuple(self._parse_sequence(")"))

    def _parse_sequence(self, terminator: str) -> List[AST]:
        items: List[AST] = []
        if self._match_symbol(terminator):
            return items
        while True:
            items.append(self._parse_pipe())
            if self._match_symbol(","):
                continue
            if self._match_symbol(terminator):
                return items
            raise self._error(f"Expected ',' or '{terminator}'")

    # Token helpers

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            return Token(type='EOF', value='', position=len(self._tokens))
        return self._tokens[self._position]

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        if not self._is_at_end():
            self._position += 1
        return self._tokens[self._position - 1] if self._position > 0 else self._current_token()

    def _match_operator(self, op: str) -> bool:
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value == op:
            self._advance()
            return True
        return False

    def _match_symbol(self, symbol: str) -> bool:
        current = self._current_token()
        if current.type == 'SYMBOL' and current.value == symbol:
            self._advance()
            return True
        return False

    def _match_keyword(self, keyword: str) -> bool:
        current = self._current_token()
        if current.type == 'KEYWORD' and current.value == keyword:
            self._advance()
            return True
        return False

    def _consume_name(self, error_message: str) -> str:
        # keywords are valid property names: a.null, a.this
        current = self._current_token()
        if current.type in ('IDENTIFIER', 'KEYWORD'):
            self._advance()
            return str(current.value)
        raise self._error(error_message)

    def _error(self, message: str) -> ExpressionParseError:
        return ExpressionParseError(message, self._offset + self._current_token().position)


def split_interpolation(text: str) -> Optional[Tuple[List[str], List[Tuple[str, int]]]]:
    """
    Split ``a {{ b }} c`` into literal strings and expression chunks.

    Closing braces inside quoted strings do not end an expression.
    A ``{{`` without a matching ``}}`` is kept as literal text.

    Returns:
        ``(strings, [(expression_text, offset), ...])`` with one more string
        than expressions, or ``None`` when there is no interpolation
    """
    strings: List[str] = []
    chunks: List[Tuple[str, int]] = []

    pos = 0
    literal_start = 0
    while True:
        start = text.find(INTERPOLATION_START, pos)
        if start < 0:
            break
        expr_start = start + len(INTERPOLATION_START)
        end = _find_interpolation_end(text, expr_start)
        if end < 0:
            break
        strings.append(text[literal_start:start])
        chunks.append((text[expr_start:end], expr_start))
        pos = literal_start = end + len(INTERPOLATION_END)

    if not chunks:
        return None
    strings.append(text[literal_start:])
    return strings, chunks


def _find_interpolation_end(text: str, start: int) -> int:
    quote: Optional[str] = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif text.startswith(INTERPOLATION_END, i):
            return i
        i += 1
    return -1


def _find_closing_brace(text: str, start: int) -> int:
    depth = 0
    quote: Optional[str] = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                return i
            depth -= 1
        i += 1
    return -1


__all__ = ["ExpressionParser", "ExpressionParseError", "split_interpolation"]
