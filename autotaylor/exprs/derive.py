r"""@package autotaylor.exprs.derive

Symbolic differentiation of expression nodes.

The actual rules are implemented by the individual node classes (see
nodes.Node._grad()). This module provides the public entry points, most
notably derivative_chain(), which returns all successive derivatives up to a
given order as needed e.g. for Taylor expansions.

No simplification is performed, so each derivative is usually considerably
larger than the expression it was computed from. For example:

~~~.py
expr = Mul(X, X)
derive(expr)            # (1 * x) + (x * 1)
derive(expr, 2)         # ((0 * x) + (1 * 1)) + ((1 * 1) + (x * 0))
~~~
"""

import logging

from .nodes import Node


__all__ = [
    "derive",
    "derivative_chain",
]


logger = logging.getLogger(__name__)


def _check_node(node):
    if not isinstance(node, Node):
        raise TypeError("Can only differentiate expression nodes, got '%s'."
                        % type(node).__name__)


def derive(node, order=1):
    r"""Return the derivative of a given order of an expression.

    Args:
        node:   The expression to differentiate.
        order:  Number of times to differentiate. Default is `1`. For
                ``order=0``, the expression itself is returned.
    """
    _check_node(node)
    if order < 0:
        raise ValueError("Derivative order must be non-negative, got %r." % order)
    for _ in range(order):
        node = node._grad()
    return node


def derivative_chain(node, n):
    r"""Return the list of the first `n` derivatives of an expression.

    The result is the list \f$ [f, f', f'', \ldots, f^{(n-1)}] \f$, where each
    element is computed from the previous one. The list is empty for
    ``n == 0``.
    """
    _check_node(node)
    if n < 0:
        raise ValueError("Chain length must be non-negative, got %r." % n)
    chain = [node] if n else []
    while len(chain) < n:
        chain.append(chain[-1]._grad())
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Derivative chain sizes: %s", [d.size() for d in chain])
    return chain
