import pytest

from mpcomb import (
    TextInput, SeqInput, alt, bind, fail, item, lit, not_p, plus, result,
    zero_or_more,
)


def pair():
    return bind(item(), lambda a: bind(item(), lambda b: result((a, b))))


class TestPrimitives:
    def test_result_consumes_nothing(self):
        inp = TextInput("foo")
        assert result(42)(inp) == [(42, inp)]

    def test_fail(self):
        assert fail()(TextInput("foo")) == []
        assert fail()(TextInput("")) == []

    def test_item(self):
        assert item()(TextInput("foo")) == [("f", TextInput("oo"))]
        assert item()(TextInput("")) == []

    def test_item_on_tokens(self):
        assert item()(SeqInput(["x", "y"])) == [("x", SeqInput(["y"]))]


class TestScenarios:
    def test_bind_tags_character(self):
        p = bind(item(), lambda c: result([":char", c]))
        assert p(TextInput("foo")) == [([":char", "f"], TextInput("oo"))]

    def test_zero_or_more_greedy(self):
        a_star = zero_or_more(lit("a"))
        assert a_star(TextInput("aaaab")) == [(["a", "a", "a", "a"], TextInput("b"))]

    def test_zero_or_more_no_match(self):
        a_star = zero_or_more(lit("a"))
        assert a_star(TextInput("bbbba")) == [([], TextInput("bbbba"))]

    def test_plus_keeps_both_readings(self):
        p = plus(pair(), item())
        assert p(TextInput("asd")) == [
            (("a", "s"), TextInput("d")),
            ("a", TextInput("sd")),
        ]

    def test_alt_invokes_each_branch_once(self, counting):
        p1 = counting(fail())
        p2 = counting(result(7))
        p = alt(p1, p2)
        for n, text in enumerate(["", "x", "xyz"], start=1):
            inp = TextInput(text)
            assert p(inp) == [(7, inp)]
            assert p1.calls == n
            assert p2.calls == n


class TestBind:
    def test_order_is_depth_first(self):
        p = bind(plus(result(1), result(2)), lambda x: plus(result((x, "a")), result((x, "b"))))
        inp = TextInput("")
        assert [v for v, _ in p(inp)] == [(1, "a"), (1, "b"), (2, "a"), (2, "b")]

    def test_continuation_sees_remainder(self):
        p = bind(item(), lambda _: item())
        assert p(TextInput("xyz")) == [("y", TextInput("z"))]

    def test_failure_propagates(self):
        assert bind(item(), lambda _: item())(TextInput("x")) == []


class TestChoice:
    def test_plus_order(self):
        inp = TextInput("q")
        assert plus(result(1), result(2), result(3))(inp) == [(1, inp), (2, inp), (3, inp)]

    def test_alt_short_circuits(self, counting):
        second = counting(result(2))
        inp = TextInput("q")
        assert alt(result(1), second)(inp) == [(1, inp)]
        assert second.calls == 0

    def test_alt_returns_whole_ambiguous_reply(self):
        inp = TextInput("q")
        assert alt(plus(result(1), result(2)), result(3))(inp) == [(1, inp), (2, inp)]

    def test_alt_all_fail(self):
        assert alt(fail(), fail())(TextInput("q")) == []
        assert alt()(TextInput("q")) == []


class TestNegation:
    def test_succeeds_when_parser_fails(self):
        inp = TextInput("b")
        assert not_p(lit("a"))(inp) == [(True, inp)]

    def test_fails_when_parser_succeeds(self):
        assert not_p(lit("a"))(TextInput("a")) == []

    def test_never_consumes(self):
        inp = TextInput("")
        assert not_p(item())(inp) == [(True, inp)]
