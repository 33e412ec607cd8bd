"""Tests for the stylesheet state machine."""

import pytest

from cssmap import CharsetError, CssmapError, ParseConfig, ParseError, Parser, Rule, parse_stylesheet
from cssmap.lexer import tokenize
from cssmap.tokens import Token


class TestSingleBlock:
    """A single `name { prop: value; }` block yields exactly one rule."""

    @pytest.mark.parametrize(
        "source,rule",
        [
            ("div { color: red; }", "div"),
            (".box { color: red; }", ".box"),
            ("#main { color: red; }", "#main"),
        ],
    )
    def test_one_rule(self, source: str, rule: str) -> None:
        assert parse_stylesheet(source) == {rule: {"color": "red"}}

    def test_keys_are_rules(self) -> None:
        sheet = parse_stylesheet(".box { color: red; }")
        (key,) = sheet
        assert isinstance(key, Rule)
        assert str(key.type) == "class"

    def test_multiple_declarations(self) -> None:
        sheet = parse_stylesheet("a { color: red; margin: 0 auto; }")
        assert sheet == {"a": {"color": "red", "margin": "0 auto"}}

    def test_bytes_input(self) -> None:
        assert parse_stylesheet(b"a { c: 1; }") == {"a": {"c": "1"}}

    def test_empty_block(self) -> None:
        assert parse_stylesheet("a { }") == {"a": {}}

    def test_empty_input(self) -> None:
        assert parse_stylesheet("") == {}
        assert parse_stylesheet(b"  \n ") == {}

    def test_last_semicolon_optional(self) -> None:
        assert parse_stylesheet("a { c: 1; d: 2 }") == {"a": {"c": "1", "d": "2"}}

    def test_repeated_property_in_block(self) -> None:
        assert parse_stylesheet("a { c: 1; c: 2; }") == {"a": {"c": "2"}}


class TestWhitespace:
    @pytest.mark.parametrize(
        "source",
        [
            "a{c:1;}",
            "a { c : 1 ; }",
            "a\n{\n\tc:\t1;\n}\n",
            "  a  {  c:  1  ;  }  ",
        ],
    )
    def test_insensitive(self, source: str) -> None:
        assert parse_stylesheet(source) == {"a": {"c": "1"}}


class TestSelectorGroups:
    def test_comma_group(self) -> None:
        assert parse_stylesheet("a, b { c: 1; }") == {"a": {"c": "1"}, "b": {"c": "1"}}

    def test_prefixed_group(self) -> None:
        sheet = parse_stylesheet(".a, #b, c { d: 1; }")
        assert sheet == {".a": {"d": "1"}, "#b": {"d": "1"}, "c": {"d": "1"}}

    def test_space_separated_names_are_a_group(self) -> None:
        assert parse_stylesheet("a b { c: 1; }") == {"a": {"c": "1"}, "b": {"c": "1"}}

    def test_group_members_do_not_share_declarations(self) -> None:
        sheet = parse_stylesheet("a, b { c: 1; } a { d: 2; }")
        assert sheet == {"a": {"c": "1", "d": "2"}, "b": {"c": "1"}}
        assert sheet["a"] is not sheet["b"]


class TestMerge:
    """A selector seen again only gains properties; first value wins."""

    def test_first_value_wins(self) -> None:
        sheet = parse_stylesheet("a { c: 1; } a { c: 2; d: 3; }")
        assert sheet == {"a": {"c": "1", "d": "3"}}

    def test_across_groups(self) -> None:
        sheet = parse_stylesheet(".x { color: red; }\n.x, p { color: blue; margin: 0; }")
        assert sheet == {
            ".x": {"color": "red", "margin": "0"},
            "p": {"color": "blue", "margin": "0"},
        }

    def test_empty_block_keeps_existing(self) -> None:
        assert parse_stylesheet("a { c: 1; } a { }") == {"a": {"c": "1"}}

    def test_many_blocks(self) -> None:
        source = "\n".join(f".r{i} {{ n: {i}; }}" for i in range(50))
        sheet = parse_stylesheet(source)
        assert len(sheet) == 50
        assert sheet[".r49"] == {"n": "49"}


class TestSyntaxErrors:
    def test_missing_separator(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_stylesheet("a {\n  c 1;\n}")
        assert exc_info.value.line == 2
        assert exc_info.value.token_text == "1"

    @pytest.mark.parametrize(
        "source,token",
        [
            ("}", "}"),
            ("{ c: 1; }", "{"),
            ("a { c: 1; ; }", ";"),
            ("a { c: ; }", ";"),
            ("a { c }", "}"),
            ("a { c: }", "}"),
            ("a { b { } }", "{"),
            ("a { .b: 1; }", "."),
            ("a : b { }", ":"),
            ("a { c: 1; } ; ", ";"),
            ("a { : 1; }", ":"),
            (". { }", "{"),
        ],
    )
    def test_unexpected_token(self, source: str, token: str) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_stylesheet(source)
        assert exc_info.value.token_text == token
        assert exc_info.value.line == 1
        assert "unexpected token" in exc_info.value.message

    def test_message_names_kind(self) -> None:
        with pytest.raises(ParseError, match="STATEMENT_END"):
            parse_stylesheet("a { c: ; }")

    def test_partial_stylesheet_kept(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_stylesheet("a { c: 1; }\nb { d: 2; }\nx { y }")
        err = exc_info.value
        assert err.line == 3
        assert err.stylesheet == {"a": {"c": "1"}, "b": {"d": "2"}}

    def test_deterministic(self) -> None:
        errors = []
        for _ in range(2):
            with pytest.raises(ParseError) as exc_info:
                parse_stylesheet("a { c 1; }")
            errors.append((exc_info.value.line, exc_info.value.token_text))
        assert errors[0] == errors[1]


class TestEndOfInput:
    """Input ending inside a rule fails loudly unless salvage is enabled."""

    def test_unclosed_block_fails(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_stylesheet("a { c: 1;\n")
        assert "not closed" in exc_info.value.message
        assert exc_info.value.token_text == ""
        assert exc_info.value.line == 1

    @pytest.mark.parametrize("source", ["a", "a b", "a .", ".a"])
    def test_dangling_selector_fails(self, source: str) -> None:
        with pytest.raises(ParseError, match="end of input"):
            parse_stylesheet(source)

    def test_unclosed_block_keeps_committed(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_stylesheet("a { c: 1; }\nb { d: 2;")
        assert exc_info.value.stylesheet == {"a": {"c": "1"}}
        assert exc_info.value.line == 2

    def test_salvage(self) -> None:
        config = ParseConfig(allow_unclosed_block=True)
        assert parse_stylesheet("a { c: 1; d: 2", config) == {"a": {"c": "1", "d": "2"}}

    def test_salvage_drops_incomplete_declaration(self) -> None:
        config = ParseConfig(allow_unclosed_block=True)
        assert parse_stylesheet("a { c: 1; d:", config) == {"a": {"c": "1"}}

    def test_salvage_still_rejects_dangling_selector(self) -> None:
        config = ParseConfig(allow_unclosed_block=True)
        with pytest.raises(ParseError):
            parse_stylesheet("a { c: 1; } b", config)


class TestParser:
    def test_from_tokens(self) -> None:
        tokens = [Token("a", 1), Token("{", 1), Token("c", 1), Token(":", 1), Token("1", 1), Token(";", 1), Token("}", 1)]
        assert Parser(tokens).parse() == {"a": {"c": "1"}}

    def test_from_lexer_output(self) -> None:
        assert Parser(tokenize("a{c:1;}")).parse() == {"a": {"c": "1"}}

    def test_rejects_other_input(self) -> None:
        with pytest.raises(TypeError):
            Parser(42)  # type: ignore[arg-type]

    def test_each_parser_has_its_own_state(self) -> None:
        first = Parser("a { c: 1; }").parse()
        second = Parser("a { c: 2; }").parse()
        assert first == {"a": {"c": "1"}}
        assert second == {"a": {"c": "2"}}

    def test_encoding(self) -> None:
        raw = "p { content: é; }".encode("latin-1")
        sheet = parse_stylesheet(raw, ParseConfig(encoding="latin-1"))
        assert sheet == {"p": {"content": "é"}}


class TestDecoding:
    """Bytes input never fails on decoding; bad sequences become U+FFFD."""

    def test_invalid_utf8_is_replaced(self) -> None:
        assert parse_stylesheet(b"a { c: \xff; }") == {"a": {"c": "�"}}

    def test_invalid_bytes_in_selector(self) -> None:
        assert parse_stylesheet(b"\xfe\xff { c: 1; }") == {"��": {"c": "1"}}

    def test_unknown_encoding(self) -> None:
        with pytest.raises(CharsetError) as exc_info:
            parse_stylesheet(b"a { c: 1; }", ParseConfig(encoding="no-such-codec"))
        assert exc_info.value.encoding == "no-such-codec"
        assert isinstance(exc_info.value, CssmapError)
