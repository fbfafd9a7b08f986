"""
Algebraic properties of the combinators, checked with Hypothesis over
short texts drawn from a two-letter alphabet.
"""

from hypothesis import given, strategies as st

from mpcomb import (
    TextInput, alt, bind, fail, item, lit, not_p, one_or_more, plus, result,
    zero_or_more,
)


def pair():
    return bind(item(), lambda a: bind(item(), lambda b: result((a, b))))


PARSERS = [
    result(0),
    fail(),
    item(),
    lit("a"),
    pair(),
    plus(item(), result("x")),
    plus(pair(), item()),
    alt(lit("b"), result("y")),
    not_p(lit("a")),
    zero_or_more(lit("a")),
]

# parsers that consume input whenever they succeed
CONSUMING = [item(), lit("a"), lit("b"), pair(), plus(pair(), item())]

CONTINUATIONS = [
    lambda v: result((v, v)),
    lambda v: item(),
    lambda v: fail(),
    lambda v: plus(result(v), item()),
    lambda v: lit("a") if v == "a" else result(repr(v)),
]

texts = st.text(alphabet="ab", max_size=8).map(TextInput)
parsers = st.sampled_from(PARSERS)
consuming = st.sampled_from(CONSUMING)
continuations = st.sampled_from(CONTINUATIONS)
values = st.sampled_from(["a", "b", 0, None, ("t",), []])


def same_multiset(xs, ys):
    rest = list(ys)
    for x in xs:
        if x not in rest:
            return False
        rest.remove(x)
    return not rest


# ---- monad laws ----

@given(values, continuations, texts)
def test_left_identity(x, f, inp):
    assert bind(result(x), f)(inp) == f(x)(inp)


@given(parsers, texts)
def test_right_identity(p, inp):
    assert bind(p, result)(inp) == p(inp)


@given(parsers, continuations, continuations, texts)
def test_associativity(p, f, g, inp):
    lhs = bind(bind(p, f), g)
    rhs = bind(p, lambda x: bind(f(x), g))
    assert lhs(inp) == rhs(inp)


# ---- zero ----

@given(continuations, texts)
def test_fail_is_left_annihilator(f, inp):
    assert bind(fail(), f)(inp) == []


@given(parsers, texts)
def test_fail_is_right_annihilator(p, inp):
    assert bind(p, lambda _: fail())(inp) == []


# ---- plus ----

@given(parsers, texts)
def test_fail_is_identity_of_plus(p, inp):
    assert plus(fail(), p)(inp) == p(inp)
    assert plus(p, fail())(inp) == p(inp)


@given(parsers, parsers, parsers, texts)
def test_plus_is_associative(p, q, r, inp):
    assert plus(plus(p, q), r)(inp) == plus(p, plus(q, r))(inp)


@given(parsers, parsers, texts)
def test_plus_is_commutative_up_to_order(p, q, inp):
    assert same_multiset(plus(p, q)(inp), plus(q, p)(inp))


@given(parsers, parsers, texts)
def test_plus_concatenates(p, q, inp):
    assert plus(p, q)(inp) == p(inp) + q(inp)


# ---- alt / not_p ----

@given(parsers, parsers, texts)
def test_alt_picks_first_non_empty(p, q, inp):
    first = p(inp)
    assert alt(p, q)(inp) == (first if first else q(inp))


@given(parsers, texts)
def test_not_p_never_consumes(p, inp):
    replies = not_p(p)(inp)
    if p(inp):
        assert replies == []
    else:
        assert replies == [(True, inp)]


# ---- repetition ----

@given(consuming, texts)
def test_zero_or_more_always_succeeds(p, inp):
    replies = zero_or_more(p)(inp)
    assert replies
    assert all(isinstance(v, list) for v, _ in replies)


@given(consuming, texts)
def test_one_or_more_fails_exactly_when_p_fails(p, inp):
    assert (one_or_more(p)(inp) == []) == (p(inp) == [])


@given(consuming, texts)
def test_one_or_more_extends_zero_or_more(p, inp):
    if p(inp):
        assert one_or_more(p)(inp) == zero_or_more(p)(inp)
