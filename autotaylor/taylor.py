r"""@package autotaylor.taylor

Truncated Taylor series of expressions.

The Taylor series of order `N` of an expression `f` around the expansion point
`a` is
\f[
    T_N f(x) = \sum_{n=0}^{N-1} \frac{f^{(n)}(a)}{n!} (x-a)^n,
\f]
i.e. it consists of `N` terms. The derivatives are computed symbolically
(see exprs.derive.derivative_chain()) and evaluated exactly once per series,
while the powers of `(x-a)` use the fast integer power numutils.powi().

@b Examples

```
    expr = Pow(Ln(X), Div(PI, X))
    taylor_eval(expr, 2.0, 2.5, 5)      # one-off evaluation

    series = TaylorSeries(expr, 2.0, 5, precision='single')
    series(2.5)                         # re-uses the coefficients

    cmp = TaylorComparison(expr, 2.0, 5, diff_order=1)
    cmp.exact(2.5), cmp.approx(2.5)
```
"""

import logging
import numbers
import warnings

from .exprs.common import ExpressionWarning
from .exprs.context import get_context
from .exprs.derive import derive, derivative_chain
from .numutils import powi, factorial, inf_norm1d


__all__ = [
    "taylor_eval",
    "TaylorSeries",
    "TaylorComparison",
]


logger = logging.getLogger(__name__)


def taylor_eval(node, a, x, order, use_mp=False, precision='double', dps=None):
    r"""Evaluate the Taylor series of an expression at a point.

    This builds the derivative chain of `node` for each call. Use
    TaylorSeries for repeated evaluations with the same expansion point.

    Args:
        node:   Expression to expand.
        a:      Expansion point.
        x:      Point at which to evaluate the series.
        order:  Number `N` of terms (positive integer).
        use_mp: Whether to use `mpmath` arbitrary precision arithmetics.
        precision: Precision (``'single'`` or ``'double'``) for floating
                point evaluation.
        dps:    Decimal places in case `use_mp` is `True`.
    """
    series = TaylorSeries(node, a, order, use_mp=use_mp, precision=precision,
                          dps=dps)
    return series(x)


class TaylorSeries(object):
    r"""Truncated Taylor series of an expression around a fixed point.

    Upon construction, the derivatives `D^0, ..., D^(N-1)` of the expression
    are computed, evaluated at the expansion point, and divided by the
    factorials. Evaluating the series at a point `x` then just needs `N`
    integer powers of `(x-a)`.
    """

    def __init__(self, node, a, order, use_mp=False, precision='double', dps=None):
        r"""Create the series.

        Args:
            node:   Expression to expand.
            a:      Expansion point.
            order:  Number `N` of terms (positive integer).
            use_mp: Whether to use `mpmath` arbitrary precision arithmetics.
            precision: Precision (``'single'`` or ``'double'``) for floating
                    point evaluation.
            dps:    Decimal places in case `use_mp` is `True`.
        """
        if (not isinstance(order, numbers.Integral) or isinstance(order, bool)
                or order < 1):
            raise ValueError("Taylor order must be a positive integer, got %r."
                             % (order,))
        ctx = get_context(use_mp=use_mp, precision=precision, dps=dps)
        ## The expanded expression.
        self.node = node
        ## Number of terms of the series.
        self.order = int(order)
        ## Numeric context used for evaluation.
        self.ctx = ctx
        ## List of the derivative nodes `[f, f', ..., f^(N-1)]`.
        self.chain = derivative_chain(node, self.order)
        cache = dict()
        with ctx.scope():
            funcs = [d.compiled(ctx, cache) for d in self.chain]
            self._a = ctx.convert(a)
            derivs = [f(self._a) for f in funcs]
            self._coeffs = [ctx.div(d, ctx.convert(factorial(n)))
                            for n, d in enumerate(derivs)]
        logger.debug("Taylor coefficients of %s at a=%s: %s",
                     node.str(), a, self._coeffs)
        if not all(ctx.isfinite(c) for c in self._coeffs):
            warnings.warn(
                "Taylor coefficients of %s at a=%s are not all finite."
                % (node.str(), a),
                ExpressionWarning
            )

    def __repr__(self):
        return ("<TaylorSeries(N=%d, a=%s, f=%s)>"
                % (self.order, self._a, self.node.str()))

    @property
    def a(self):
        r"""The expansion point (converted to the context's number type)."""
        return self._a

    @property
    def coeffs(self):
        r"""The coefficients `f^(n)(a) / n!` for `n = 0, ..., N-1`."""
        return list(self._coeffs)

    def __call__(self, x):
        r"""Evaluate the series at a point x."""
        ctx = self.ctx
        with ctx.scope():
            h = ctx.convert(x) - self._a
            result = ctx.zero
            for n, c in enumerate(self._coeffs):
                result = result + c * powi(h, n)
            return result


class TaylorComparison(object):
    r"""Pair of exact and approximate evaluation of an expression.

    The *reference* expression is the given expression differentiated
    `diff_order` times. Its values are computed directly by exact() and
    through its Taylor series by approx().
    """

    def __init__(self, node, expansion_point, order, diff_order=0,
                 use_mp=False, precision='double', dps=None):
        r"""Create the comparison.

        Args:
            node:   Root expression.
            expansion_point: Expansion point `a` of the Taylor series.
            order:  Number `N` of terms of the Taylor series.
            diff_order: How often to differentiate `node` to obtain the
                    reference expression. Default is `0`.
            use_mp, precision, dps: Evaluation mode, see TaylorSeries.
        """
        ## The root expression.
        self.node = node
        ## Number of derivatives applied to the root expression.
        self.diff_order = diff_order
        ## The expression being compared (root differentiated `diff_order` times).
        self.reference = derive(node, diff_order)
        ## Evaluator of the reference expression.
        self.evaluator = self.reference.evaluator(use_mp=use_mp,
                                                  precision=precision, dps=dps)
        ## Taylor series of the reference expression.
        self.series = TaylorSeries(self.reference, expansion_point, order,
                                   use_mp=use_mp, precision=precision, dps=dps)

    @property
    def expansion_point(self):
        return self.series.a

    @property
    def order(self):
        return self.series.order

    def exact(self, x):
        r"""Evaluate the reference expression at x."""
        return self.evaluator(x)

    def approx(self, x):
        r"""Evaluate the Taylor series of the reference expression at x."""
        return self.series(x)

    def error(self, x):
        r"""Absolute difference between approx() and exact() at x."""
        approx, exact = self.approx(x), self.exact(x)
        with self.series.ctx.scope():
            return abs(approx - exact)

    def max_error(self, domain, Ns=50):
        r"""Maximum error on an interval.

        @return A pair ``(x, delta)`` with the point `x` of maximum error
            `delta`. See numutils.inf_norm1d().
        """
        return inf_norm1d(self.approx, self.exact, domain=domain, Ns=Ns)
