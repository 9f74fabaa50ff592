r"""@package autotaylor.exprs.nodes

Expression nodes of a scalar function of one variable.

An expression is a tree built from the fixed vocabulary of node classes
defined here:

    Constant, Zero, One     # literals
    Variable                # the (single) free variable x
    Add, Sub, Mul, Div      # binary arithmetics
    Exp, Ln                 # transcendental functions
    Pow                     # general power a(x)^b(x)

Each node class knows how to evaluate itself (see _compile()) and how to
produce its derivative as a *new* node (see _grad()). Nodes are immutable:
once built, neither a node nor any of its children can be changed. This
allows sharing sub-trees freely between expressions, e.g. between an
expression and its derivative.

Like in any expression system that separates definition from evaluation,
nodes are not evaluated directly. Instead, an *evaluator* is created, which
compiles the tree into nested closures for a given numeric context (numpy
floats of single/double precision or `mpmath` arbitrary precision):

~~~.py
expr = Pow(Ln(X), Div(PI, X))   # ln(x)^(pi/x)
f = expr.evaluator(precision='single')
print("f(2.5) =", f(2.5))
print("f'(2.5) =", f.diff(2.5))
~~~

For one-off evaluations, Node.eval() may be used instead.

Numbers given as children of nodes are automatically converted to Constant
nodes, with `0` and `1` turning into the canonical ZERO and ONE nodes.
"""

from abc import ABCMeta, abstractmethod
import math

import sympy as sp

from .common import is_real_number


__all__ = [
    "Node",
    "Constant",
    "Zero",
    "One",
    "Variable",
    "Add",
    "Sub",
    "Mul",
    "Div",
    "Exp",
    "Ln",
    "Pow",
    "const",
    "ZERO",
    "ONE",
    "PI",
    "E",
    "X",
]


class Node(metaclass=ABCMeta):
    r"""Base class of all expression nodes.

    Child nodes are stored in the `args` tuple. Sub classes need to
    implement:
        * _expr_str() returning a string representation of the node
        * _grad() returning the derivative node
        * _compile() creating a callable evaluating the node
        * _to_sympy() converting the node to a SymPy expression

    Nodes compare equal if they are of the same type and have equal children
    (or values, in case of constants).
    """

    __slots__ = ("_args", "_hash")

    ## Names of the children as used in traverse_tree() and print_tree().
    arg_names = ()

    def __init__(self, *args):
        object.__setattr__(self, "_args", tuple(_ensure_node(a) for a in args))
        object.__setattr__(self, "_hash", None)

    def __setattr__(self, name, value):
        raise AttributeError("'%s' nodes are immutable" % type(self).__name__)

    def __delattr__(self, name):
        raise AttributeError("'%s' nodes are immutable" % type(self).__name__)

    def __reduce__(self):
        return (type(self), self._args)

    @property
    def args(self):
        r"""Tuple of child nodes (empty for leaves)."""
        return self._args

    def _key(self):
        r"""Data identifying this node (together with its type)."""
        return self._args

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        if self is other:
            return True
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        h = self._hash
        if h is None:
            h = hash((type(self).__name__, self._key()))
            object.__setattr__(self, "_hash", h)
        return h

    def __repr__(self):
        return "<%s(%s)>" % (type(self).__name__, self.str())

    def __str__(self):
        return self.str()

    def str(self):
        r"""Return the expression in infix notation, e.g. ``ln(x) ^ (pi / x)``."""
        return self._expr_str()

    @property
    def nice_name(self):
        r"""Short description of the node used in print_tree()."""
        return type(self).__name__

    def traverse_tree(self, include_root=False, parents=None):
        r"""Generator that walks through the complete expression tree.

        In each iteration, the returned values represent the current node's
        parents (as a list from root to immediate parent), its name in its
        parent (see `arg_names`), and the node itself.

        Args:
            include_root: Whether to include the root as first item. Default
                is `False`.
            parents: Optional list of parents of the root. Normally only used
                internally for the recursion.

        @b Examples
        \code
            for parents, name, node in expr.traverse_tree():
                print("-"*len(parents), name)
        \endcode
        """
        if parents is None:
            parents = []
        if include_root:
            yield parents, "", self
        parents = parents + [self]
        for name, node in zip(self.arg_names, self._args):
            yield parents, name, node
            for item in node.traverse_tree(include_root=False, parents=parents):
                yield item

    def print_tree(self, root_name='root'):
        r"""Print the whole expression tree, one node per line."""
        def _p(node, name, parents=()):
            print("%s%s [%s] <%s>" % (
                ". " * len(parents), name, node.nice_name, type(node).__name__
            ))
        _p(self, root_name)
        for parents, name, node in self.traverse_tree():
            _p(node, name, parents)

    def size(self):
        r"""Number of nodes in the tree (shared sub-trees counted repeatedly)."""
        return 1 + sum(a.size() for a in self._args)

    def depth(self):
        r"""Length of the longest path from this node to a leaf (leaves have 0)."""
        if not self._args:
            return 0
        return 1 + max(a.depth() for a in self._args)

    def is_constant(self):
        r"""Return whether the node does not depend on the variable."""
        return all(a.is_constant() for a in self._args)

    def is_zero_expression(self):
        r"""Return whether this node is known to be identically zero.

        Only the canonical Zero node (and constants of value zero) claim
        this, since no simplification is performed.
        """
        return False

    def evaluator(self, use_mp=False, precision='double', dps=None):
        r"""Create an evaluator for this expression.

        The evaluator is a callable taking the value of the variable. It also
        allows evaluating derivatives of any order via its `diff()` method.

        Args:
            use_mp: Whether to evaluate using `mpmath` arbitrary precision
                arithmetics. Default is `False`.
            precision: Floating point precision (``'single'`` or
                ``'double'``) in case ``use_mp==False``. Default is
                ``'double'``.
            dps: Decimal places for `mpmath` evaluations. By default, the
                global `mp.dps` setting is used.
        """
        from .evaluators import NodeEvaluator
        from .context import get_context
        return NodeEvaluator(self, get_context(use_mp=use_mp,
                                               precision=precision, dps=dps))

    def eval(self, point, use_mp=False, precision='double', dps=None):
        r"""Evaluate the expression at a given point.

        Note that this compiles the expression on each call. Use evaluator()
        for repeated evaluation.
        """
        return self.evaluator(use_mp=use_mp, precision=precision, dps=dps)(point)

    def compiled(self, ctx, cache=None):
        r"""Return a callable evaluating this node in the given context.

        The callable expects its argument to already be converted to the
        number type of `ctx`.

        Args:
            ctx: Numeric context (see context.get_context()).
            cache: Optional dictionary re-used when compiling multiple
                (possibly overlapping) trees. Equal sub-trees are compiled
                only once.
        """
        if cache is None:
            cache = dict()
        try:
            return cache[self]
        except KeyError:
            pass
        func = self._compile(ctx, cache)
        cache[self] = func
        return func

    def to_sympy(self, symbol=None):
        r"""Convert the expression into a SymPy expression.

        Args:
            symbol: SymPy symbol to use for the variable. By default, a
                symbol `x` is created.
        """
        if symbol is None:
            symbol = sp.Symbol('x')
        return self._to_sympy(symbol)

    @abstractmethod
    def _expr_str(self):
        r"""String representing the node including its children."""
        pass

    @abstractmethod
    def _grad(self):
        r"""Return the derivative of this node as a new node.

        No simplifications are done here. Sub classes need to construct the
        derivative strictly according to the respective rule.
        """
        pass

    @abstractmethod
    def _compile(self, ctx, cache):
        r"""Create the callable for evaluating this node (see compiled())."""
        pass

    @abstractmethod
    def _to_sympy(self, x):
        pass


def _ensure_node(value):
    r"""Ensure an object is a node, converting numbers to constants."""
    if isinstance(value, Node):
        return value
    if is_real_number(value):
        return const(value)
    raise TypeError("Cannot use object of type '%s' as expression node."
                    % type(value).__name__)


def _paren(node):
    r"""String of a child node, in parentheses unless it is atomic."""
    if isinstance(node, _BinaryNode):
        return "(%s)" % node.str()
    return node.str()


class Constant(Node):
    r"""Constant expression \f$ f(x) = c \f$.

    The value of the constant can be accessed through the `value` property.
    Named constants (like PI) carry a name used when printing them and when
    converting them to SymPy.
    """

    __slots__ = ("_value", "_name")

    ## SymPy representations of named constants.
    _sympy_constants = {'pi': sp.pi, 'e': sp.E}

    def __init__(self, value, name=None):
        r"""Init function.

        Args:
            value:  The constant value.
            name:   Optional name (e.g. ``'pi'``) to show instead of the value.
        """
        if not is_real_number(value):
            raise TypeError("Constant value must be a real number, got '%s'."
                            % type(value).__name__)
        super(Constant, self).__init__()
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_name", name)

    def __reduce__(self):
        return (type(self), (self._value, self._name))

    @property
    def value(self):
        r"""The numeric value of the constant."""
        return self._value

    @property
    def name(self):
        r"""Name of the constant or `None`."""
        return self._name

    def _key(self):
        return (self._value, self._name)

    @property
    def nice_name(self):
        if self._name:
            return "%s (%r)" % (self._name, self._value)
        return "%r" % self._value

    def is_constant(self):
        return True

    def is_zero_expression(self):
        return self._value == 0

    def _expr_str(self):
        if self._name:
            return self._name
        return "%r" % self._value

    def _grad(self):
        return ZERO

    def _compile(self, ctx, cache):
        c = ctx.constant(self._value, self._name)
        return lambda x: c

    def _to_sympy(self, x):
        if self._name in self._sympy_constants:
            return self._sympy_constants[self._name]
        if isinstance(self._value, int):
            return sp.Integer(self._value)
        return sp.Float(float(self._value))


class Zero(Constant):
    r"""The canonical constant zero."""

    __slots__ = ()

    def __init__(self):
        super(Zero, self).__init__(0)

    def __reduce__(self):
        return (_canonical_zero, ())

    def _compile(self, ctx, cache):
        zero = ctx.zero
        return lambda x: zero

    def _to_sympy(self, x):
        return sp.S.Zero


class One(Constant):
    r"""The canonical constant one."""

    __slots__ = ()

    def __init__(self):
        super(One, self).__init__(1)

    def __reduce__(self):
        return (_canonical_one, ())

    def _compile(self, ctx, cache):
        one = ctx.one
        return lambda x: one

    def _to_sympy(self, x):
        return sp.S.One


class Variable(Node):
    r"""The free variable \f$ f(x) = x \f$.

    Only one free variable is supported. All Variable nodes represent the
    same variable and hence compare equal.
    """

    __slots__ = ()

    def __reduce__(self):
        return (type(self), ())

    def is_constant(self):
        return False

    def _expr_str(self):
        return "x"

    def _grad(self):
        return ONE

    def _compile(self, ctx, cache):
        return _identity

    def _to_sympy(self, x):
        return x


def _identity(x):
    return x


class _BinaryNode(Node):
    r"""Base for nodes with two children `a` and `b`."""

    __slots__ = ()

    arg_names = ("a", "b")
    ## Operator symbol used in the string representation.
    symbol = None

    def __init__(self, a, b):
        super(_BinaryNode, self).__init__(a, b)

    @property
    def a(self):
        r"""First operand."""
        return self._args[0]

    @property
    def b(self):
        r"""Second operand."""
        return self._args[1]

    def _expr_str(self):
        return "%s %s %s" % (_paren(self.a), self.symbol, _paren(self.b))


class _UnaryNode(Node):
    r"""Base for functions applied to a single child `a`."""

    __slots__ = ()

    arg_names = ("a",)
    ## Function name used in the string representation.
    func_name = None

    def __init__(self, a):
        super(_UnaryNode, self).__init__(a)

    @property
    def a(self):
        r"""The function argument."""
        return self._args[0]

    def _expr_str(self):
        return "%s(%s)" % (self.func_name, self.a.str())


class Add(_BinaryNode):
    r"""Sum \f$ f(x) = a(x) + b(x) \f$."""

    __slots__ = ()
    symbol = "+"

    def _grad(self):
        return Add(self.a._grad(), self.b._grad())

    def _compile(self, ctx, cache):
        fa = self.a.compiled(ctx, cache)
        fb = self.b.compiled(ctx, cache)
        return lambda x: fa(x) + fb(x)

    def _to_sympy(self, x):
        return self.a._to_sympy(x) + self.b._to_sympy(x)


class Sub(_BinaryNode):
    r"""Difference \f$ f(x) = a(x) - b(x) \f$."""

    __slots__ = ()
    symbol = "-"

    def _grad(self):
        return Sub(self.a._grad(), self.b._grad())

    def _compile(self, ctx, cache):
        fa = self.a.compiled(ctx, cache)
        fb = self.b.compiled(ctx, cache)
        return lambda x: fa(x) - fb(x)

    def _to_sympy(self, x):
        return self.a._to_sympy(x) - self.b._to_sympy(x)


class Mul(_BinaryNode):
    r"""Product \f$ f(x) = a(x) b(x) \f$."""

    __slots__ = ()
    symbol = "*"

    def _grad(self):
        a, b = self.a, self.b
        return Add(Mul(a._grad(), b), Mul(a, b._grad()))

    def _compile(self, ctx, cache):
        fa = self.a.compiled(ctx, cache)
        fb = self.b.compiled(ctx, cache)
        return lambda x: fa(x) * fb(x)

    def _to_sympy(self, x):
        return self.a._to_sympy(x) * self.b._to_sympy(x)


class Div(_BinaryNode):
    r"""Quotient \f$ f(x) = a(x) / b(x) \f$.

    Division by zero results in `inf` or `nan` and does not raise.
    """

    __slots__ = ()
    symbol = "/"

    def _grad(self):
        a, b = self.a, self.b
        return Div(Sub(Mul(b, a._grad()), Mul(a, b._grad())), Mul(b, b))

    def _compile(self, ctx, cache):
        fa = self.a.compiled(ctx, cache)
        fb = self.b.compiled(ctx, cache)
        div = ctx.div
        return lambda x: div(fa(x), fb(x))

    def _to_sympy(self, x):
        return self.a._to_sympy(x) / self.b._to_sympy(x)


class Exp(_UnaryNode):
    r"""Exponential function \f$ f(x) = e^{a(x)} \f$."""

    __slots__ = ()
    func_name = "exp"

    def _grad(self):
        return Mul(self, self.a._grad())

    def _compile(self, ctx, cache):
        fa = self.a.compiled(ctx, cache)
        exp = ctx.exp
        return lambda x: exp(fa(x))

    def _to_sympy(self, x):
        return sp.exp(self.a._to_sympy(x))


class Ln(_UnaryNode):
    r"""Natural logarithm \f$ f(x) = \ln a(x) \f$.

    Non-positive arguments result in `nan` (`-inf` for zero) and do not
    raise.
    """

    __slots__ = ()
    func_name = "ln"

    def _grad(self):
        return Div(self.a._grad(), self.a)

    def _compile(self, ctx, cache):
        fa = self.a.compiled(ctx, cache)
        log = ctx.log
        return lambda x: log(fa(x))

    def _to_sympy(self, x):
        return sp.log(self.a._to_sympy(x))


class Pow(_BinaryNode):
    r"""General power \f$ f(x) = a(x)^{b(x)} \f$.

    Both, base and exponent, may depend on the variable. The derivative is
    computed using the generalized power rule
    \f[
        (a^b)' = a^{b-1} \left(b a' + a \ln(a) b'\right),
    \f]
    which reduces to the usual power rule for constant `b` and the rule for
    exponentials for constant `a`. Note that the `ln(a)` term evaluates to
    `nan` for negative bases even if `b` is constant.
    """

    __slots__ = ()
    arg_names = ("base", "exponent")
    symbol = "^"

    @property
    def base(self):
        return self.a

    @property
    def exponent(self):
        return self.b

    def _grad(self):
        a, b = self.a, self.b
        return Mul(Pow(a, Sub(b, ONE)),
                   Add(Mul(b, a._grad()), Mul(a, Mul(Ln(a), b._grad()))))

    def _compile(self, ctx, cache):
        fa = self.a.compiled(ctx, cache)
        fb = self.b.compiled(ctx, cache)
        power = ctx.power
        return lambda x: power(fa(x), fb(x))

    def _to_sympy(self, x):
        return self.a._to_sympy(x) ** self.b._to_sympy(x)


def const(value, name=None):
    r"""Create a constant node for a number.

    The values `0` and `1` (without a name) produce the canonical ZERO and
    ONE nodes.
    """
    if name is None and not isinstance(value, bool):
        if value == 0:
            return ZERO
        if value == 1:
            return ONE
    return Constant(value, name=name)


## The canonical zero constant.
ZERO = Zero()
## The canonical one constant.
ONE = One()
## The number pi.
PI = Constant(math.pi, name='pi')
## Euler's number.
E = Constant(math.e, name='e')
## The free variable.
X = Variable()


def _canonical_zero():
    r"""Return ZERO (used when unpickling Zero nodes)."""
    return ZERO


def _canonical_one():
    r"""Return ONE (used when unpickling One nodes)."""
    return ONE
