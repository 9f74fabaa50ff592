r"""@package autotaylor.exprs.evaluators

Evaluators of expression nodes.

An evaluator is a light-weight callable object created from a node for a
given numeric context (see context.get_context()). Upon creation, the node is
compiled into nested closures once, so repeated evaluation does not need to
walk the expression tree.

Derivatives are available through diff() and function(). The required
derivative nodes are computed (and compiled) only when first requested and
are cached afterwards.
"""

import threading

from .common import _zero_function
from .nodes import Node


__all__ = [
    "NodeEvaluator",
]


class NodeEvaluator(object):
    r"""Callable evaluating an expression and its derivatives.

    The argument of each call is converted to the number type of the context
    (e.g. `numpy.float32` for single precision) and the result is of that
    type too. Numeric problems (division by zero, logarithms of negative
    numbers, etc.) lead to `inf` or `nan` results and never raise.
    """

    def __init__(self, node, ctx):
        r"""Create an evaluator for a node.

        @param node
            The expression to evaluate.
        @param ctx
            Numeric context, i.e. a context.FloatContext or
            context.MpContext object.
        """
        if not isinstance(node, Node):
            raise TypeError("Evaluators can only be created for expression nodes.")
        ## The evaluated expression.
        self.node = node
        ## The numeric context.
        self.ctx = ctx
        ## Derivative nodes computed so far (the 0'th element is `node`).
        self._nodes = [node]
        ## Compiled callables for the derivatives computed so far.
        self._funcs = []
        ## Compilation cache shared by all derivatives.
        self._cache = dict()
        ## Guards growing the derivative caches when shared between threads.
        self._lock = threading.RLock()
        self._get_func(0)

    def __repr__(self):
        return "<NodeEvaluator(%s, %r)>" % (self.node.str(), self.ctx)

    @property
    def use_mp(self):
        r"""Whether `mpmath` is used for evaluation."""
        return self.ctx.use_mp

    @property
    def precision(self):
        r"""Precision name of the context (``'single'``, ``'double'``, ``'mp'``)."""
        return self.ctx.precision

    def derivative_node(self, n):
        r"""Return the expression node of the n'th derivative."""
        with self._lock:
            nodes = self._nodes
            while len(nodes) <= n:
                nodes.append(nodes[-1]._grad())
            return nodes[n]

    def is_zero_function(self, n=0):
        r"""Return whether the n'th derivative is known to vanish identically."""
        return self.derivative_node(n).is_zero_expression()

    def _get_func(self, n):
        r"""Cached compilation of the n'th derivative."""
        if n < 0:
            raise ValueError("Derivative order must be non-negative, got %r." % n)
        with self._lock:
            if n < len(self._funcs):
                return self._funcs[n]
            ctx = self.ctx
            # constants are converted at the precision of the context
            with ctx.scope():
                for i in range(len(self._funcs), n+1):
                    node = self.derivative_node(i)
                    self._funcs.append(node.compiled(ctx, self._cache))
            return self._funcs[n]

    def __call__(self, x):
        r"""Evaluate the expression at a point x."""
        ctx = self.ctx
        with ctx.scope():
            return self._funcs[0](ctx.convert(x))

    def diff(self, x, n=1):
        r"""Evaluate the n'th derivative of the expression at a point x."""
        ctx = self.ctx
        fn = self._get_func(n)
        with ctx.scope():
            return fn(ctx.convert(x))

    def function(self, n=0):
        r"""Return a callable for the n'th derivative.

        If the derivative is known to vanish, the common zero function is
        returned (see common.is_zero_function()).
        """
        if self.is_zero_function(n):
            return _zero_function
        self._get_func(n)
        return lambda x: self.diff(x, n)
