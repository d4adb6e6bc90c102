import pytest

from rational import DivisionByZero, Overflow, ParseError
from rational.expression import Binary, Literal, parse, parse_statement
from rational.floats import SINGLE
from rational.integer import INT8, INT32, INT64
from rational.number import Rational
from rational.session import Session


def test_parse_structure() -> None:
    tree = parse('1/2 + 1/3')
    assert isinstance(tree, Binary)
    assert tree.op == '+'
    assert str(tree) == '(1 / 2) + (1 / 3)'
    assert isinstance(tree.left.left, Literal)

    name, tree = parse_statement('x = 2 * y')
    assert name == 'x'
    assert str(tree) == '2 * y'

    name, _ = parse_statement('x')
    assert name is None


@pytest.mark.parametrize('text, expected', [
    ('1 + 2 * 3', Rational(7)),
    ('(1 + 2) * 3', Rational(9)),
    ('7/3', Rational(7, 3)),
    ('1 - 1/3 - 1/3', Rational(1, 3)),
    ('-2^2', Rational(-4)),
    ('2^-1', Rational(1, 2)),
    ('2^3^2', Rational(512)),
    ('~(2/3)', Rational(3, 2)),
    ('abs(-3/4)', Rational(3, 4)),
    ('pow(2/3, 2)', Rational(4, 9)),
    ('inv(4)', Rational(1, 4)),
    ('num(6/4)', Rational(3)),
    ('den(6/4)', Rational(2)),
    ('0.5 + 0.25', Rational(3, 4)),
])
def test_evaluate(text: str, expected: Rational) -> None:
    assert Session().evaluate(text).value == expected


@pytest.mark.parametrize('text', ['', '1 +', '1 2', '(1', 'foo(1)', 'pow(1)', 'y', '2^(1/2)', '1 $ 2'])
def test_evaluate_parse_errors(text: str) -> None:
    with pytest.raises(ParseError):
        Session().evaluate(text)


def test_evaluate_arithmetic_errors() -> None:
    with pytest.raises(DivisionByZero):
        Session().evaluate('1/0')
    with pytest.raises(DivisionByZero):
        Session().evaluate('inv(0)')
    with pytest.raises(Overflow):
        Session(INT8).evaluate('100 + 100')


def test_evaluation_steps() -> None:
    evaluation = Session().evaluate('1/2 + 1/3')
    assert evaluation.value == Rational(5, 6)
    assert [str(value) for _, value in evaluation.steps] == ['1/1', '2/1', '1/2', '1/1', '3/1', '1/3', '5/6']
    assert evaluation.steps[-1][0] is evaluation.tree

    table = evaluation.tabulate_steps()
    assert 'Fraction' in table
    assert '5/6' in table


def test_graph_representation() -> None:
    session = Session()
    evaluation = session.run('x = 1/2 + 1/3')
    g = evaluation.graph_representation()
    assert len(g.get_nodes()) == len(evaluation.steps) + 1
    assert len(g.get_edges()) == 7


def test_run_assigns_variables(capsys) -> None:
    session = Session()
    evaluation = session.run('x = 1/2 + 1/3')
    assert evaluation.name == 'x'
    assert session['x'] == Rational(5, 6)
    assert session.run('x * 6').value == 5
    assert session.is_variable('x')
    assert not session.is_variable('y')

    session.run('x = 1')
    assert 'Redefining x' in capsys.readouterr().err
    assert 'x' in session.tabulate_variables()


def test_variables_are_not_aliased() -> None:
    session = Session()
    session.run('x = 1/2')
    session.run('y = x')
    session['y'].increment()
    assert session['x'] == Rational(1, 2)


def test_inexact_decimal_warning(capsys) -> None:
    session = Session()
    assert session.evaluate('0.5').value == Rational(1, 2)
    assert capsys.readouterr().err == ''

    value = session.evaluate('0.1').value
    assert value == Rational.from_float(0.1)
    assert 'not exact' in capsys.readouterr().err


def test_from_obj() -> None:
    session = Session.from_obj({
        'type': 'int32',
        'overflow': 'wrap',
        'float': 'single',
        'variables': {'half': '1/2', 'quarter': 'half * half', 'three': 3, 'eighth': 0.125},
    })
    assert session.dtype == INT32.wrapping()
    assert session.fmt is SINGLE
    assert session['quarter'] == Rational(1, 4, session.dtype)
    assert session['three'] == 3
    assert session['eighth'] == Rational(1, 8, session.dtype)
    assert session.graph_path is None


def test_from_obj_overflow_policies() -> None:
    assert Session.from_obj({'type': 'int8', 'overflow': 'checked'}).dtype == INT8
    session = Session.from_obj({'type': 'int8', 'overflow': 'wrap'})
    assert session.dtype == INT8.wrapping()
    assert session.evaluate('100 + 100').value == Rational(-56, 1, session.dtype)


def test_half_precision_literals(capsys) -> None:
    session = Session.from_obj({'float': 'half'})
    assert session.evaluate('0.01').value == Rational(1311, 2 ** 17)
    assert '1311/131072' in capsys.readouterr().err


def test_from_obj_variables_only() -> None:
    session = Session.from_obj({'a': '1/3', 'b': 'a + 1'})
    assert session.dtype == INT64
    assert session['b'] == Rational(4, 3)


def test_from_obj_graph_settings() -> None:
    session = Session.from_obj({'graph': 'tree', 'format': 'svg'})
    assert (session.graph_path, session.graph_format) == ('tree', 'svg')
    assert list(session.variables()) == []


def test_from_obj_empty() -> None:
    session = Session.from_obj(None)
    assert session.dtype == INT64
    assert list(session.variables()) == []


@pytest.mark.parametrize('obj', [
    {'type': 'int7'},
    {'overflow': 'saturate'},
    {'float': 'quad'},
    {'variables': {'a': [1, 2]}},
    {'variables': {'a': '1/'}},
    ['1/2'],
])
def test_from_obj_errors(obj) -> None:
    with pytest.raises(ParseError):
        Session.from_obj(obj)
