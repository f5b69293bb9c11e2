from __future__ import annotations

from django.template.base import Token, TokenType
from django.test import SimpleTestCase

from apps.prerender.exceptions import TagSyntaxError
from apps.prerender.tag.parser import (
    END,
    ArgumentParser,
    Consume,
    Forward,
    RawToken,
    TagArguments,
    TokenKind,
    bracket_depth,
    classify,
    parse_bits,
)


def _parse(contents: str):
    return parse_bits(Token(TokenType.BLOCK, contents).split_contents())


class ClassifyTests(SimpleTestCase):
    def test_quoted_bits_are_strings(self) -> None:
        self.assertEqual(classify("'Header'"), RawToken(TokenKind.STRING, "'Header'"))
        self.assertEqual(classify('"Header"'), RawToken(TokenKind.STRING, '"Header"'))

    def test_everything_else_is_a_variable(self) -> None:
        self.assertIs(classify("props").kind, TokenKind.VAR)
        self.assertIs(classify("'a'|upper").kind, TokenKind.VAR)
        self.assertIs(classify("{tag:").kind, TokenKind.VAR)

    def test_bracket_depth_ignores_quoted_brackets(self) -> None:
        self.assertEqual(bracket_depth("{label: '}'"), 1)
        self.assertEqual(bracket_depth("{a: [1, 2]}"), 0)


class ArgumentParserTests(SimpleTestCase):
    def test_literal_reference(self) -> None:
        parsed = _parse("react 'Header'")
        self.assertEqual(parsed.tag_name, "react")
        self.assertEqual(parsed.arguments, TagArguments("Header", component_is_literal=True))
        self.assertEqual(parsed.forwarded, ())

    def test_variable_reference(self) -> None:
        parsed = _parse("react widget.path")
        self.assertEqual(parsed.arguments, TagArguments("widget.path"))

    def test_with_and_in_clauses(self) -> None:
        args = _parse("react 'HelloMessage' with props in el").arguments
        self.assertEqual(args.props_expr, "props")
        self.assertEqual(args.container_expr, "el")

    def test_clause_order_does_not_matter(self) -> None:
        self.assertEqual(
            _parse("react 'X' with p in c").arguments,
            _parse("react 'X' in c with p").arguments,
        )

    def test_absent_clauses_stay_unset(self) -> None:
        args = _parse("react 'X' in 'span'").arguments
        self.assertIsNone(args.props_expr)
        self.assertEqual(args.container_expr, "'span'")

    def test_inline_literal_spans_several_bits(self) -> None:
        args = _parse("react 'X' with {name: 'O Brien', tags: ['a', 'b']} in { tag: 'span', class: 'foo' }").arguments
        self.assertEqual(args.props_expr, "{name: 'O Brien', tags: ['a', 'b']}")
        self.assertEqual(args.container_expr, "{ tag: 'span', class: 'foo' }")

    def test_brace_inside_string_does_not_close_literal(self) -> None:
        args = _parse("react 'X' with {label: '}', more: 1}").arguments
        self.assertEqual(args.props_expr, "{label: '}', more: 1}")

    def test_unknown_tokens_are_forwarded(self) -> None:
        parsed = _parse("react 'X' unexpected with p")
        self.assertEqual(parsed.forwarded, (RawToken(TokenKind.VAR, "unexpected"),))
        self.assertEqual(parsed.arguments.props_expr, "p")

    def test_keywords_are_case_sensitive(self) -> None:
        parsed = _parse("react 'X' WITH p")
        self.assertIsNone(parsed.arguments.props_expr)
        self.assertEqual([t.text for t in parsed.forwarded], ["WITH", "p"])

    def test_feed_reports_consume_or_forward(self) -> None:
        machine = ArgumentParser("react")
        self.assertEqual(machine.feed(classify("'X'")), Consume("component"))
        self.assertEqual(machine.feed(classify("with")), Consume("with"))
        self.assertEqual(machine.feed(classify("props")), Consume("props"))
        self.assertEqual(machine.feed(classify("'extra'")), Forward(classify("'extra'")))

    def test_end_token_is_not_fed(self) -> None:
        with self.assertRaises(ValueError):
            ArgumentParser().feed(END)


class ArgumentParserErrorTests(SimpleTestCase):
    def test_empty_tag_body(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "requires a component reference"):
            _parse("react")

    def test_empty_string_reference(self) -> None:
        with self.assertRaises(TagSyntaxError):
            _parse("react ''")

    def test_keyword_in_reference_slot(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "expected a component reference, got 'with'"):
            _parse("react with props")

    def test_dangling_keyword(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "expected an expression after 'with'"):
            _parse("react 'X' with")

    def test_duplicate_clause(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "accepts a single 'in' clause"):
            _parse("react 'X' in a in b")

    def test_unterminated_literal(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "unterminated literal after 'in'"):
            _parse("react 'X' in {tag: 'span'")
