import re
from typing import List, Optional, Tuple

from rational import ParseError
from rational.number import Rational

token_pattern = re.compile(r'\s*(?:(\d+\.\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|\d+[eE][+-]?\d+)|(\d+)|([a-zA-Z_]\w*)|(\S))')
statement_pattern = re.compile(r'\s*([a-zA-Z_]\w*)\s*=(?!=)(.*)$')

DECIMAL, INTEGER, NAME, SYMBOL = 'decimal', 'integer', 'name', 'symbol'

Token = Tuple[str, str]


class Node:
    """
    A node of a parsed expression. Evaluating a node records its value with the evaluation it belongs to.
    """

    def children(self) -> List['Node']:
        return []

    def evaluate(self, evaluation) -> Rational:
        return evaluation.record(self, self._evaluate(evaluation))

    def _evaluate(self, evaluation) -> Rational:
        raise NotImplementedError


class Literal(Node):
    def __init__(self, text: str):
        self.text = text

    def _evaluate(self, evaluation):
        return evaluation.session.literal(self.text)

    def __str__(self):
        return self.text


class Name(Node):
    def __init__(self, name: str):
        self.name = name

    def _evaluate(self, evaluation):
        return evaluation.session[self.name].copy()

    def __str__(self):
        return self.name


class Unary(Node):
    def __init__(self, op: str, operand: Node):
        self.op = op
        self.operand = operand

    def children(self):
        return [self.operand]

    def _evaluate(self, evaluation):
        value = self.operand.evaluate(evaluation)
        if self.op == '-':
            return -value
        if self.op == '~':
            return ~value
        return +value

    def __str__(self):
        return '{}{}'.format(self.op, _wrap(self.operand))


class Binary(Node):
    def __init__(self, op: str, left: Node, right: Node):
        self.op = op
        self.left = left
        self.right = right

    def children(self):
        return [self.left, self.right]

    def _evaluate(self, evaluation):
        left = self.left.evaluate(evaluation)
        right = self.right.evaluate(evaluation)
        if self.op == '+':
            return left + right
        if self.op == '-':
            return left - right
        if self.op == '*':
            return left * right
        if self.op == '/':
            return left / right
        return left ** _integer(right)

    def __str__(self):
        return '{} {} {}'.format(_wrap(self.left), self.op, _wrap(self.right))


class Call(Node):
    arity = {'abs': 1, 'inv': 1, 'num': 1, 'den': 1, 'pow': 2}

    def __init__(self, func: str, args: List[Node]):
        if func not in self.arity:
            raise ParseError("Function '{}' not defined.".format(func))
        if len(args) != self.arity[func]:
            raise ParseError("Function '{}' takes {} argument(s).".format(func, self.arity[func]))
        self.func = func
        self.args = args

    def children(self):
        return list(self.args)

    def _evaluate(self, evaluation):
        values = [a.evaluate(evaluation) for a in self.args]
        x = values[0]
        if self.func == 'abs':
            return abs(x)
        if self.func == 'inv':
            return x.reciprocal()
        if self.func == 'num':
            return Rational(x.numerator, 1, x.dtype)
        if self.func == 'den':
            return Rational(x.denominator, 1, x.dtype)
        return x ** _integer(values[1])

    def __str__(self):
        return '{}({})'.format(self.func, ', '.join(map(str, self.args)))


def _wrap(node: Node) -> str:
    return '({})'.format(node) if isinstance(node, (Binary, Unary)) else str(node)


def _integer(value: Rational) -> int:
    if value.denominator != 1:
        raise ParseError("Exponent {} is not an integer.".format(value))
    return value.numerator


def tokenize(text: str) -> List[Token]:
    tokens = []
    pos = 0
    while pos < len(text):
        m = token_pattern.match(text, pos)
        if m is None:
            # only trailing whitespace is left
            break
        pos = m.end()
        if m[1] is not None:
            tokens.append((DECIMAL, m[1]))
        elif m[2] is not None:
            tokens.append((INTEGER, m[2]))
        elif m[3] is not None:
            tokens.append((NAME, m[3]))
        else:
            tokens.append((SYMBOL, m[4]))
    return tokens


class Parser:
    """
    Recursive descent parser for rational expressions.

    expr  := term (('+' | '-') term)*
    term  := unary (('*' | '/') unary)*
    unary := ('-' | '+' | '~') unary | power
    power := atom ('^' unary)?
    atom  := number | name | name '(' expr (',' expr)* ')' | '(' expr ')'
    """

    def __init__(self, text: str):
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    def parse(self) -> Node:
        if not self.tokens:
            raise ParseError('Empty expression.')
        node = self._expr()
        if self.pos < len(self.tokens):
            raise ParseError("Unexpected '{}' in: {}".format(self.tokens[self.pos][1], self.text))
        return node

    def _peek(self) -> Optional[Token]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def _accept(self, *symbols: str) -> Optional[str]:
        token = self._peek()
        if token is not None and token[0] == SYMBOL and token[1] in symbols:
            self.pos += 1
            return token[1]
        return None

    def _expect(self, symbol: str):
        if self._accept(symbol) is None:
            raise ParseError("Expected '{}' in: {}".format(symbol, self.text))

    def _expr(self) -> Node:
        node = self._term()
        op = self._accept('+', '-')
        while op is not None:
            node = Binary(op, node, self._term())
            op = self._accept('+', '-')
        return node

    def _term(self) -> Node:
        node = self._unary()
        op = self._accept('*', '/')
        while op is not None:
            node = Binary(op, node, self._unary())
            op = self._accept('*', '/')
        return node

    def _unary(self) -> Node:
        op = self._accept('-', '+', '~')
        if op is not None:
            return Unary(op, self._unary())
        return self._power()

    def _power(self) -> Node:
        node = self._atom()
        if self._accept('^') is not None:
            node = Binary('^', node, self._unary())
        return node

    def _atom(self) -> Node:
        token = self._peek()
        if token is None:
            raise ParseError('Unexpected end of expression: ' + self.text)
        kind, text = token
        self.pos += 1

        if kind in (DECIMAL, INTEGER):
            return Literal(text)
        if kind == NAME:
            if self._accept('(') is None:
                return Name(text)
            args = [self._expr()]
            while self._accept(',') is not None:
                args.append(self._expr())
            self._expect(')')
            return Call(text, args)
        if text == '(':
            node = self._expr()
            self._expect(')')
            return node
        raise ParseError("Unexpected '{}' in: {}".format(text, self.text))


def parse(text: str) -> Node:
    return Parser(text).parse()


def parse_statement(line: str) -> Tuple[Optional[str], Node]:
    """
    Split an optional `name =` assignment from the expression.
    :return: The assigned name, or None, and the parsed expression.
    """
    m = statement_pattern.match(line)
    if m is None:
        return None, parse(line)
    return m[1], parse(m[2])
