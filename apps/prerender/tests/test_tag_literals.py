from __future__ import annotations

from django.template import Context, Engine
from django.template.base import Parser
from django.test import SimpleTestCase

from apps.prerender.exceptions import TagSyntaxError
from apps.prerender.tag.ir import ArrayLiteral, Literal, ObjectLiteral, Variable
from apps.prerender.tag.literals import lex, parse_expression


def _parser() -> Parser:
    return Parser([], builtins=Engine().template_builtins)


class LexTests(SimpleTestCase):
    def test_lex_skips_whitespace(self) -> None:
        self.assertEqual(
            lex("{ a: 'b c' }"),
            [("punct", "{"), ("atom", "a"), ("punct", ":"), ("string", "'b c'"), ("punct", "}")],
        )

    def test_unterminated_string(self) -> None:
        with self.assertRaises(TagSyntaxError):
            lex("{a: 'oops}")


class ParseExpressionTests(SimpleTestCase):
    def test_empty_object(self) -> None:
        self.assertEqual(parse_expression("{}"), ObjectLiteral(()))

    def test_scalars_and_variables(self) -> None:
        expr = parse_expression("{title: 'Hi', count: 3, ratio: 0.5, on: true, off: false, none: null, user: user.name}", _parser())
        self.assertEqual(
            expr,
            ObjectLiteral((
                ("title", Literal("Hi")),
                ("count", Literal(3)),
                ("ratio", Literal(0.5)),
                ("on", Literal(True)),
                ("off", Literal(False)),
                ("none", Literal(None)),
                ("user", Variable("user.name")),
            )),
        )

    def test_quoted_and_hyphenated_keys(self) -> None:
        expr = parse_expression("{'aria-label': 'x', data-id: 7,}")
        self.assertEqual(expr.keys(), ("aria-label", "data-id"))

    def test_nested_values(self) -> None:
        expr = parse_expression("{items: [1, {a: 'b'}, []], meta: {}}")
        self.assertEqual(
            expr,
            ObjectLiteral((
                ("items", ArrayLiteral((Literal(1), ObjectLiteral((("a", Literal("b")),)), ArrayLiteral(())))),
                ("meta", ObjectLiteral(())),
            )),
        )

    def test_plain_expressions(self) -> None:
        parser = _parser()
        self.assertEqual(parse_expression("'span'"), Literal("span"))
        self.assertEqual(parse_expression("props", parser), Variable("props"))
        self.assertEqual(parse_expression('name|default:"x"', parser), Variable('name|default:"x"'))

    def test_evaluate_against_context(self) -> None:
        expr = parse_expression("{name: user.name, tags: [tag, 'static'], missing: nope}", _parser())
        ctx = Context({"user": {"name": "Ada"}, "tag": "t1"})
        self.assertEqual(expr.evaluate(ctx), {"name": "Ada", "tags": ["t1", "static"], "missing": None})

    def test_duplicate_key(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "Duplicate key 'a'"):
            parse_expression("{a: 1, a: 2}")

    def test_missing_colon(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "Expected ':'"):
            parse_expression("{a 1}")

    def test_trailing_garbage(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "Unexpected '}'"):
            parse_expression("{a: 1}}")

    def test_missing_value(self) -> None:
        with self.assertRaisesMessage(TagSyntaxError, "Expected a value, reached end"):
            parse_expression("{a:")

    def test_variables_need_a_parser(self) -> None:
        with self.assertRaises(TagSyntaxError):
            parse_expression("{a: user}")
