r"""@package autotaylor.numutils

Miscellaneous numerical utilities and helpers.


@b Examples

```
    >>> powi(3, 5)
    243
    >>> factorial(5)
    120
```
"""

import numbers

import numpy as np
from scipy import optimize


__all__ = [
    "powi",
    "factorial",
    "central_difference",
    "inf_norm1d",
]


def powi(base, exponent):
    r"""Raise a number to a non-negative integer power.

    Uses binary exponentiation, i.e. the number of multiplications grows
    only logarithmically with `exponent`. Starting from the highest set bit of
    the exponent (where the result is initialized to `base`), the result is
    squared for each lower bit and additionally multiplied by `base` if that
    bit is set.

    Any type supporting multiplication can be used for `base`, as long as
    ``type(base)(1)`` creates its multiplicative identity (true for `int`,
    `float`, numpy scalars and `mpmath` numbers). The result has the type of
    `base`.

    @param base
        Number to raise to a power.
    @param exponent
        Non-negative integer exponent. For ``exponent == 0``, the result is
        one, even if `base` is zero.
    """
    if not isinstance(exponent, numbers.Integral) or isinstance(exponent, bool):
        raise ValueError("Exponent must be an integer, got %r." % (exponent,))
    exponent = int(exponent)
    if exponent < 0:
        raise ValueError("Exponent must be non-negative, got %d." % exponent)
    if exponent == 0:
        return type(base)(1)
    result = base
    for bit in range(exponent.bit_length() - 2, -1, -1):
        result = result * result
        if (exponent >> bit) & 1:
            result = result * base
    return result


def factorial(n):
    r"""Compute n! iteratively as an integer (``factorial(0) == 1``)."""
    if n < 0:
        raise ValueError("Factorial of negative number %r." % (n,))
    result = 1
    for i in range(2, n+1):
        result *= i
    return result


def central_difference(f, x, h=1e-4):
    r"""Estimate the derivative of `f` at `x` via a central finite difference.

    The error of this estimate is of order `h**2` (plus the rounding error
    of order `eps/h`).
    """
    return (f(x + h) - f(x - h)) / (2 * h)


def inf_norm1d(f1, f2=None, domain=None, Ns=50, xatol=1e-12):
    r"""Compute the L^inf norm of f1-f2 on an interval.

    The `scipy.optimize.brute` method is used to find a candidate close to the
    global maximum difference. This is then taken as starting point for a
    search for the local maximum difference. Setting the number of samples
    `Ns` high enough should lead to the global maximum difference being found.

    Points at which the difference is not finite (e.g. `nan`) are ignored.

    @param f1
        First function.
    @param f2
        Second function. If not given, simply finds the maximum absolute
        value of `f1`.
    @param domain
        Domain ``[a, b]`` inside which to search for the maximum difference.
    @param Ns
        Number of initial samples for the `scipy.optimize.brute` call. In case
        ``Ns <= 2``, the `brute()` step is skipped an a local extremum is
        found inside the given `domain`. Default is `50`.
    @param xatol
        Absolute tolerance of the location of the maximum.

    @return A pair ``(x, delta)``, where `x` is the point at which the maximum
        difference was found and `delta` is the difference at that point.
    """
    if domain is None:
        raise ValueError("A domain is required.")
    if f2 is None:
        f2 = lambda x: 0.0
    a, b = map(float, domain)
    def func(x):
        x = float(np.asarray(x).ravel()[0])
        if not a <= x <= b:
            return 0.
        with np.errstate(all='ignore'):
            delta = abs(float(f1(x)) - float(f2(x)))
        if not np.isfinite(delta):
            return 0.
        return -delta
    x0 = None
    if Ns <= 2:
        bounds = [a, b]
    else:
        x0 = float(np.asarray(optimize.brute(func, [(a, b)], Ns=Ns, finish=None)).ravel()[0])
        step = (b-a)/(Ns-1)
        bounds = [max(a, x0-step), min(b, x0+step)]
    res = optimize.minimize_scalar(
        func, bounds=bounds, method='bounded',
        options=dict(xatol=xatol),
    )
    x, fun = float(res.x), float(res.fun)
    if x0 is not None and func(x0) < fun:
        # the local search never hits the interval boundaries exactly
        x, fun = x0, func(x0)
    return x, -fun
