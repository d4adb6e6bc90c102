import sys
from fractions import Fraction
from typing import Dict, List, Optional, Tuple

from tabulate import tabulate

from rational import ParseError
from rational import floats, integer
from rational.expression import Node, parse, parse_statement
from rational.floats import FloatFormat
from rational.integer import IntegerType
from rational.number import Rational

SETTINGS = {'type', 'overflow', 'float', 'graph', 'format', 'variables'}
OVERFLOW_POLICIES = {'checked': IntegerType.checked, 'wrap': IntegerType.wrapping}


class Evaluation:
    """
    The value of an expression along with the value of every sub-expression which led to it.
    """

    def __init__(self, session, tree: Node, name: Optional[str] = None):
        """
        :param session: Session which supplies variables and literal conversion.
        :param tree: The parsed expression.
        :param name: Variable the result is assigned to, if any.
        """
        self.session = session
        self.tree = tree
        self.name = name

        # (sub-expression, value) in the order they were computed
        self.steps: List[Tuple[Node, Rational]] = []
        self.value = tree.evaluate(self)

    def record(self, node: Node, value: Rational) -> Rational:
        self.steps.append((node, value))
        return value

    def tabulate_steps(self, **kwargs) -> str:
        """
        Create an ascii table of each sub-expression and its value.
        :param kwargs: Additional arguments to pass to tabulate.
        :return: String of the ascii table.
        """
        rows = [[str(node), str(value), value.evaluate(float)] for node, value in self.steps]
        if self.name is not None:
            rows.append([self.name, str(self.value), self.value.evaluate(float)])
        return tabulate(rows, headers=['Expression', 'Fraction', 'Approx'], **kwargs)

    def graph_representation(self):
        """
        Construct a dot graph of the expression tree, each node labeled with its value.
        :return: The dot graph
        """
        from pydot import Dot, Edge, Node as DotNode

        g = Dot()
        ids = {id(node): 'n{}'.format(i) for i, (node, _) in enumerate(self.steps)}

        for node, value in self.steps:
            shape = 'box' if node.children() else 'ellipse'
            g.add_node(DotNode(ids[id(node)], label='"{}\\n{}"'.format(node, value), shape=shape))
            for child in node.children():
                g.add_edge(Edge(ids[id(child)], ids[id(node)]))

        if self.name is not None:
            g.add_node(DotNode('result', label='"{}"'.format(self.name), style='dashed'))
            g.add_edge(Edge(ids[id(self.tree)], 'result'))

        return g

    def write_graph(self, path='out', fmt='png'):
        g = self.graph_representation()
        g.write('{}.{}'.format(path, fmt), format=fmt)


class Session:
    def __init__(self, dtype: IntegerType = integer.DEFAULT_TYPE, fmt: FloatFormat = floats.DOUBLE):
        """
        A set of named rationals and the settings expressions are evaluated with.
        :param dtype: Integer type of every rational in the session.
        :param fmt: Binary format decimal literals are read as.
        """
        self.dtype = dtype
        self.fmt = fmt
        self.graph_path: Optional[str] = None
        self.graph_format = 'png'
        self._variables: Dict[str, Rational] = {}

    @staticmethod
    def from_obj(obj: Optional[Dict]):
        """
        Parse a settings object. Mostly to read from YAML or JSON.
        :param obj: See the settings schema in the readme.
        :return: a new Session
        """
        obj = obj or {}
        if not isinstance(obj, dict):
            raise ParseError("Settings must be a mapping, got {}".format(type(obj).__name__))

        dtype = integer.lookup(obj.get('type', integer.DEFAULT_TYPE.name))
        overflow = str(obj.get('overflow', 'checked'))
        if overflow not in OVERFLOW_POLICIES:
            raise ParseError("Invalid overflow policy '{}', expected 'checked' or 'wrap'.".format(overflow))
        dtype = OVERFLOW_POLICIES[overflow](dtype)

        self = Session(dtype, floats.lookup(obj.get('float', floats.DOUBLE.name)))
        if 'graph' in obj:
            self.graph_path = str(obj['graph'])
            self.graph_format = str(obj.get('format', self.graph_format))

        # if no known section is present, assume the whole obj is the variables section
        if 'variables' in obj:
            variables = obj['variables'] or {}
        elif SETTINGS & set(obj.keys()):
            variables = {}
        else:
            variables = obj
        self.set_variables_from_obj(variables)

        return self

    def set_variables_from_obj(self, obj: Dict):
        """
        Define variables, in order, from an object of names to expressions. Later entries may use earlier ones.
        """
        for name, expr in obj.items():
            if not isinstance(expr, (int, float, str)) or isinstance(expr, bool):
                raise ParseError("Invalid type for variable; name: " + str(name))
            self.set_variable(str(name), self.evaluate(str(expr)).value)

    def literal(self, text: str) -> Rational:
        """
        Convert a number as written in an expression. Decimals are converted exactly from their binary value, with a
        warning if that differs from what was written.
        """
        if text.isdigit():
            return Rational(int(text), 1, self.dtype)

        value = Rational.from_float(float(text), self.dtype, self.fmt)
        if Fraction(value.numerator, value.denominator) != Fraction(text):
            print("Decimal {} is not exact in binary, using {}.".format(text, value), file=sys.stderr)
        return value

    def evaluate(self, text: str) -> Evaluation:
        return Evaluation(self, parse(text))

    def run(self, line: str) -> Evaluation:
        """
        Evaluate a line which may assign its result to a variable.
        """
        name, tree = parse_statement(line)
        result = Evaluation(self, tree, name)
        if name is not None:
            self.set_variable(name, result.value)
        return result

    def set_variable(self, name: str, value: Rational):
        if self.is_variable(name):
            print("Redefining {} (was {}).".format(name, self._variables[name]), file=sys.stderr)
        self._variables[name] = value

    def __getitem__(self, name: str) -> Rational:
        if not self.is_variable(name):
            raise ParseError("Variable '{}' not defined.".format(name))
        return self._variables[name]

    def is_variable(self, name: str) -> bool:
        return name in self._variables

    def variables(self):
        return self._variables.keys()

    def tabulate_variables(self, **kwargs) -> str:
        """
        Create an ascii table of every variable and its value.
        :param kwargs: Additional arguments to pass to tabulate.
        :return: String of the ascii table.
        """
        rows = sorted([name, str(v), v.evaluate(float)] for name, v in self._variables.items())
        return tabulate(rows, headers=['Variable', 'Fraction', 'Approx'], **kwargs)
