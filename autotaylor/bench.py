r"""@package autotaylor.bench

Simple timing of exact versus approximate evaluation.

A benchmark calls a function repeatedly at slowly moving points
``x = start, start + step, start + 2*step, ...`` and measures the total wall
time using `timeit.default_timer`.
"""

import logging
from timeit import default_timer


__all__ = [
    "BenchResult",
    "benchmark",
    "compare",
]


class BenchResult(object):
    r"""Result of a single benchmark run."""

    def __init__(self, name, samples, seconds):
        ## Label of the benchmarked function.
        self.name = name
        ## Number of calls performed.
        self.samples = samples
        ## Total wall time in seconds.
        self.seconds = seconds

    @property
    def per_call(self):
        r"""Average time per call in seconds."""
        return self.seconds / self.samples

    def __repr__(self):
        return ("%s: %d calls in %.6f s (%.3g us/call)"
                % (self.name, self.samples, self.seconds, 1e6 * self.per_call))


def benchmark(func, start, step, samples, name=None):
    r"""Time `samples` calls of `func` at points moving from `start` by `step`.

    @param func
        Callable taking one numeric argument.
    @param start
        First point.
    @param step
        Distance between consecutive points.
    @param samples
        Number of calls to perform (positive integer).
    @param name
        Label stored in the result. Defaults to the function's name.
    """
    if samples < 1:
        raise ValueError("Number of samples must be positive.")
    if name is None:
        name = getattr(func, '__name__', repr(func))
    x = start
    t0 = default_timer()
    for _ in range(samples):
        func(x)
        x += step
    result = BenchResult(name, samples, default_timer() - t0)
    logging.info("%s", result)
    return result


def compare(comparison, start, step, samples):
    r"""Benchmark approx() and exact() of a taylor.TaylorComparison.

    @return A pair of BenchResult objects for ``approx`` and ``exact`` (in
        that order).
    """
    approx = benchmark(comparison.approx, start, step, samples, name="approx")
    exact = benchmark(comparison.exact, start, step, samples, name="exact")
    return approx, exact
