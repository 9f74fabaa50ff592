r"""@package autotaylor.exprs.common

Utils used by multiple modules in autotaylor.exprs.
"""

import numbers

from mpmath import mp


__all__ = [
    "ExpressionWarning",
    "is_zero_function",
    "is_real_number",
]


class ExpressionWarning(UserWarning):
    """Warning issued when expressions might not evaluate as expected."""
    pass


def _zero_function(x):
    """Constant function 0.

    Compiled evaluators of expressions known to vanish identically return
    this exact function object, so callers can test for it cheaply.
    """
    # pylint: disable=unused-argument
    return 0


def is_zero_function(func):
    r"""Check whether a given function is the zero function.

    This checks the identity of the given function with a particular zero
    function and not its values.
    """
    return func is _zero_function


def is_real_number(value):
    r"""Return whether `value` is a real (non-complex, non-bool) number.

    Accepts Python and numpy scalars as well as `mpmath.mpf` values.
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, mp.mpf))
