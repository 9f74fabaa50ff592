r"""@package autotaylor.exprs.library

Collection of pre-built expressions that can be referred to by name.

Since expressions are not parsed from text, configuration files refer to
expressions either by one of the names in #EXPRESSIONS or by a reference of
the form ``"path/to/file.py:attr"``, where `attr` is a node (or a callable
returning a node) defined in that Python file.
"""

import os.path as op

from ..utils import import_file_as_module
from .nodes import Node, X, PI, Add, Sub, Mul, Div, Exp, Ln, Pow


__all__ = [
    "EXPRESSIONS",
    "get_expression",
    "expression_names",
]


## Named expressions. Values are functions creating the expression.
EXPRESSIONS = {
    # ln(x)^(pi/x)
    'ln_pow_pi_over_x': lambda: Pow(Ln(X), Div(PI, X)),
    'exp': lambda: Exp(X),
    'ln': lambda: Ln(X),
    'x_pow_x': lambda: Pow(X, X),
    # 1/(1+x^2)
    'rational': lambda: Div(1, Add(1, Pow(X, 2))),
    # exp(-x^2)
    'gaussian': lambda: Exp(Sub(0, Mul(X, X))),
}


def expression_names():
    r"""Sorted list of the names of all built-in expressions."""
    return sorted(EXPRESSIONS)


def get_expression(ref):
    r"""Return the expression for a name or file reference.

    Args:
        ref: Either a node (returned as is), the name of a built-in
            expression, or a string ``"file.py:attr"``. In the latter case,
            the file is loaded as module and its attribute `attr` is used. If
            it is callable, it is called without arguments to create the
            expression.

    Raises:
        KeyError: if no built-in expression with the given name exists.
        TypeError: if the referenced object is not an expression node.
    """
    if isinstance(ref, Node):
        return ref
    if ref in EXPRESSIONS:
        return EXPRESSIONS[ref]()
    if ":" not in ref:
        raise KeyError("Unknown expression '%s'. Available: %s"
                       % (ref, ", ".join(expression_names())))
    fname, attr = ref.rsplit(":", 1)
    fname = op.expanduser(fname)
    if not op.isfile(fname):
        raise KeyError("Expression file not found: %s" % fname)
    module = import_file_as_module(fname, mname='autotaylor_user_expression')
    try:
        expr = getattr(module, attr)
    except AttributeError:
        raise KeyError("File '%s' does not define '%s'." % (fname, attr))
    if callable(expr) and not isinstance(expr, Node):
        expr = expr()
    if not isinstance(expr, Node):
        raise TypeError("'%s' is not an expression node." % ref)
    return expr
