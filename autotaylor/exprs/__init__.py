r"""@package autotaylor.exprs

Expression system for composing scalar functions of one variable,
differentiating them symbolically, and evaluating them efficiently.

An expression is an immutable tree of nodes (see nodes.Node) built from a
fixed vocabulary: constants, the variable, the four basic arithmetic
operations, `exp`, `ln`, and the general power `a(x)^b(x)`. Each node class
implements both its evaluation and its derivative rule, so the derivative of
any expression is again an expression of the same vocabulary. This makes it
possible to differentiate repeatedly (see derive.derivative_chain()).

NOTE: Expressions are not evaluated directly. Instead, you create an
      *evaluator* (see evaluators.NodeEvaluator) which compiles the
      expression for a chosen numeric context: numpy floats of single or
      double precision, or `mpmath` arbitrary precision numbers.

The distinction between expressions and their evaluators may resemble that of
`SymPy` symbolic expressions and their `lambdify`'ed counterparts. In fact,
each expression can be converted to `SymPy` using nodes.Node.to_sympy(),
which is useful for displaying and verifying results.
"""

from .nodes import (Node, Constant, Zero, One, Variable, Add, Sub, Mul, Div,
                    Exp, Ln, Pow, const, ZERO, ONE, PI, E, X)
from .derive import derive, derivative_chain
from .library import get_expression
