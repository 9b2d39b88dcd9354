"""
Tests for the pattern parser.
"""

from tkx.collection import TranslationCollection
from tkx.parsers.regexp import RegexpParser


class TestRegexpParser:

    def setup_method(self):
        self.parser = RegexpParser()

    def extract(self, source, path="src/app/thing.ts"):
        return self.parser.extract(source, path)

    def test_no_matches_returns_empty_collection(self):
        result = self.extract("const a = 'hello';\nconst b = \"dfa\";")
        assert isinstance(result, TranslationCollection)
        assert result.is_empty()

    def test_single_quoted_key(self):
        result = self.extract("const title = 'dfa.foo.bar|Hello';")
        assert result.keys() == ["dfa.foo.bar|Hello"]

    def test_double_quoted_key(self):
        result = self.extract('label: "dfa.menu.file|File menu",')
        assert result.keys() == ["dfa.menu.file|File menu"]

    def test_excluded_markers(self):
        source = """
        const a = 'dfa.foo|http://example.com';
        const b = 'dfa.foo|not-set';
        const c = 'dfa.foo|kept';
        """
        result = self.extract(source)
        assert result.keys() == ["dfa.foo|kept"]

    def test_duplicates_collapsed(self):
        result = self.extract("f('dfa.a|A'); g('dfa.a|A'); h('dfa.b|B');")
        assert result.keys() == ["dfa.a|A", "dfa.b|B"]

    def test_key_requires_pipe_and_prefix(self):
        result = self.extract("x('dfa.a'); y('other.a|A'); z('dfa|A');")
        assert result.is_empty()

    def test_concatenation_is_not_a_key(self):
        result = self.extract("t('dfa.a|' + name + '!')")
        assert result.is_empty()

    def test_segments_with_digits_and_underscores(self):
        result = self.extract("'dfa.page_2.item3|Item'")
        assert result.keys() == ["dfa.page_2.item3|Item"]

    def test_works_on_markup(self):
        result = self.extract('<span title="dfa.tip.save|Save">x</span>', "src/app/page.html")
        assert result.keys() == ["dfa.tip.save|Save"]

    def test_invalid_syntax_is_scanned_as_is(self):
        result = self.extract("function ( { 'dfa.broken|Still found'")
        assert result.keys() == ["dfa.broken|Still found"]

    def test_custom_prefix_and_markers(self):
        parser = RegexpParser(key_prefix="app", excluded_markers=["|todo"])
        result = parser.extract("'app.a|A' 'app.b|todo' 'dfa.c|C'", "x.ts")
        assert result.keys() == ["app.a|A"]
