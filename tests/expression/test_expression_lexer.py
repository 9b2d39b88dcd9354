"""
Tests for the binding expression lexer.
"""

import pytest

from tkx.expression.lexer import ExpressionLexer, ExpressionParseError


class TestExpressionLexer:

    def setup_method(self):
        self.lexer = ExpressionLexer()

    def test_empty_string(self):
        tokens = self.lexer.tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == 'EOF'

    def test_whitespace_ignored(self):
        tokens = self.lexer.tokenize("   \t\n ")
        assert [t.type for t in tokens] == ['EOF']

    def test_strings_are_unescaped(self):
        tokens = self.lexer.tokenize(r"'it\'s' " + r'"a\"b\n"')
        assert tokens[0].type == 'STRING'
        assert tokens[0].value == "it's"
        assert tokens[1].value == 'a"b\n'

    def test_numbers(self):
        tokens = self.lexer.tokenize("42 2.5 .5 1e3")
        assert [t.value for t in tokens[:-1]] == [42, 2.5, 0.5, 1000.0]
        assert isinstance(tokens[0].value, int)

    def test_keywords_and_identifiers(self):
        tokens = self.lexer.tokenize("true foo $bar null")
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            ('KEYWORD', 'true'),
            ('IDENTIFIER', 'foo'),
            ('IDENTIFIER', '$bar'),
            ('KEYWORD', 'null'),
        ]

    def test_longest_operator_wins(self):
        tokens = self.lexer.tokenize("a !== b || c ?? d?.e")
        operators = [t.value for t in tokens if t.type == 'OPERATOR']
        assert operators == ['!==', '||', '??', '?.']

    def test_question_dot_before_digit_is_conditional(self):
        tokens = self.lexer.tokenize("a?.5:1")
        assert [t.value for t in tokens[:-1]] == ['a', '?', 0.5, ':', 1]

    def test_positions(self):
        tokens = self.lexer.tokenize("ab + 'c'")
        assert [t.position for t in tokens] == [0, 3, 5, 8]

    def test_unknown_character(self):
        with pytest.raises(ExpressionParseError) as exc:
            self.lexer.tokenize("a # b")
        assert exc.value.position == 2

    def test_unterminated_string(self):
        with pytest.raises(ExpressionParseError, match="Unterminated quote"):
            self.lexer.tokenize("'abc")
