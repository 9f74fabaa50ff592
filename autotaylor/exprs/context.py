r"""@package autotaylor.exprs.context

Numeric contexts used when compiling expressions into evaluators.

An expression does not evaluate itself using a fixed number type. Instead,
the evaluator is created for a *context* that decides how numbers are
represented and which math functions are used. Two contexts exist:

    * FloatContext uses numpy scalars of single (`float32`) or double
      (`float64`) precision and numpy's ufuncs. Invalid operations follow
      IEEE 754, i.e. they produce `inf` or `nan` instead of raising.
    * MpContext uses `mpmath.mp` arbitrary precision arithmetics. Since
      `mpmath` raises (or goes complex) where IEEE arithmetics would produce
      `inf` or `nan`, the critical operations are guarded here to behave like
      the floating point context.

Use get_context() to obtain the correct context for a given configuration.
"""

from contextlib import contextmanager

import numpy as np
from mpmath import mp


__all__ = [
    "PRECISIONS",
    "FloatContext",
    "MpContext",
    "get_context",
]


## Supported floating point precisions and their numpy types.
PRECISIONS = {
    'single': np.float32,
    'double': np.float64,
}


@contextmanager
def _noop_context(*_args, **_kwargs):
    r"""Empty context manager used as placeholder."""
    yield


class FloatContext(object):
    r"""Floating point context based on numpy scalars.

    All values produced by evaluators of this context are numpy scalars of
    the configured precision. Evaluation should happen inside the scope()
    context to silence numpy's floating point warnings.
    """

    use_mp = False

    def __init__(self, precision='double'):
        r"""Create a context for the given precision.

        Args:
            precision: One of ``'single'`` or ``'double'``.
        """
        try:
            ## The numpy scalar type used for all values.
            self.dtype = PRECISIONS[precision]
        except KeyError:
            raise ValueError("Unknown precision '%s'. Valid values: %s"
                             % (precision, ", ".join(sorted(PRECISIONS))))
        ## Name of the precision, i.e. ``'single'`` or ``'double'``.
        self.precision = precision
        self.zero = self.dtype(0)
        self.one = self.dtype(1)
        self.exp = np.exp
        self.log = np.log
        self.power = np.power

    def __repr__(self):
        return "<FloatContext(%s)>" % self.precision

    def convert(self, value):
        r"""Convert a number to the scalar type of this context."""
        return self.dtype(float(value))

    def constant(self, value, name=None):
        r"""Value of a (possibly named) constant in this context."""
        return self.convert(value)

    @staticmethod
    def div(a, b):
        r"""IEEE division (``1/0 == inf``, ``0/0 == nan``)."""
        return a / b

    @staticmethod
    def isfinite(value):
        return bool(np.isfinite(value))

    @staticmethod
    def isnan(value):
        return bool(np.isnan(value))

    def scope(self):
        r"""Context manager inside of which evaluation should take place."""
        return np.errstate(all='ignore')


class MpContext(object):
    r"""Arbitrary precision context based on `mpmath.mp`.

    The operations div(), log() and power() are guarded to map the cases
    that `mpmath` would either raise for or compute complex results for to
    `mp.inf` and `mp.nan`, respectively.
    """

    use_mp = True
    precision = 'mp'

    ## Named constants computed by `mpmath` (name -> `mp` attribute).
    named_constants = {'pi': 'pi', 'e': 'e'}

    def __init__(self, dps=None):
        r"""Create an `mpmath` context.

        Args:
            dps: Decimal places to use during evaluation. By default, the
                current global `mp.dps` setting is used.
        """
        ## Decimal places to use in `mp` computations (`None` to not change).
        self.dps = dps
        self.zero = mp.zero
        self.one = mp.one

    def __repr__(self):
        return "<MpContext(dps=%r)>" % self.dps

    @staticmethod
    def convert(value):
        if isinstance(value, mp.mpf):
            return value
        if isinstance(value, (np.floating, np.integer)):
            value = value.item()
        return mp.mpf(value)

    def constant(self, value, name=None):
        r"""Value of a constant, computing named ones at the current precision.

        Named constants (`pi`, `e`) are taken from `mpmath` instead of
        converting their floating point value, so they have as many digits as
        the surrounding computation. Call this inside scope().
        """
        if name in self.named_constants:
            c = +getattr(mp, self.named_constants[name])
            if float(c) == float(value):
                return c
        return self.convert(value)

    @staticmethod
    def div(a, b):
        if b == 0:
            if a == 0 or mp.isnan(a):
                return mp.nan
            return mp.inf if a > 0 else -mp.inf
        return a / b

    @staticmethod
    def exp(x):
        return mp.exp(x)

    @staticmethod
    def log(x):
        if mp.isnan(x) or x < 0:
            return mp.nan
        if x == 0:
            return -mp.inf
        return mp.log(x)

    @staticmethod
    def power(a, b):
        if mp.isnan(a) or mp.isnan(b):
            return mp.nan
        if a == 0 and b < 0:
            return mp.inf
        if mp.isinf(b):
            # limits as in IEEE pow(), also for negative bases
            m = abs(a)
            if m == 1:
                return mp.one
            return mp.inf if (m > 1) == (b > 0) else mp.zero
        if a < 0 and not mp.isint(b):
            return mp.nan
        return mp.power(a, b)

    @staticmethod
    def isfinite(value):
        return bool(mp.isfinite(value))

    @staticmethod
    def isnan(value):
        return bool(mp.isnan(value))

    def scope(self):
        r"""Context manager setting the configured decimal places (if any)."""
        if self.dps is None:
            return _noop_context()
        return mp.workdps(self.dps)


def get_context(use_mp=False, precision='double', dps=None):
    r"""Return the context for a given evaluation mode.

    Args:
        use_mp: Whether to evaluate using `mpmath` arbitrary precision
            arithmetics (`True`) or numpy floating point scalars (`False`,
            default).
        precision: Floating point precision, ``'single'`` or ``'double'``
            (default). Ignored if `use_mp` is `True`.
        dps: Decimal places for `mpmath` evaluation. Ignored if `use_mp` is
            `False`.
    """
    if use_mp:
        return MpContext(dps=dps)
    return FloatContext(precision)
