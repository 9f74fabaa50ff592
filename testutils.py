r"""@package testutils

Utilities to add more features to `unittest` classes.

This module provides a custom subclass of `unittest.TestCase`, namely
TaylorTestCase, which obeys the global configuration settings in
TestSettings. The latter can be configured by the script invoking the test
run (see `tests.py`).

This module also introduces a decorator slowtest, which, when applied,
leads to the test being skipped on normal runs. The script starting the test
must set `TestSettings.skipslow` to `False` for the slow tests to be run.
"""

import functools
import math
import sys
import time
import unittest


__all__ = [
    "TaylorTestCase",
    "TestSettings",
    "slowtest",
]


def slowtest(func):
    """Decorator for skipping a test if TestSettings.skipslow is true."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        if TestSettings.skipslow:
            raise unittest.SkipTest("skipping slow tests")
        return func(*args, **kwargs)
    return wrapper


def _isnan(value):
    try:
        return math.isnan(value)
    except TypeError:
        return False


class TaylorTestCase(unittest.TestCase):
    """Tweaked baseclass for unit tests.

    By deriving from this class, you:
        * Get timed individual tests (needs `verbosity=2`) if
          TestSettings.timing is true.
        * Get assertions for lists of floats and for values that may be
          `nan` or infinite.
    """

    def setUp(self):
        self.startTime = time.time()

    def tearDown(self):
        if TestSettings.timing:
            duration = time.time() - self.startTime
            print("(%.4f seconds) ... " % (duration), file=sys.stderr, end='')

    def assertIsType(self, obj, cls):
        r"""Assert that an object is exactly of a certain type."""
        self.assertIs(type(obj), cls)

    def assertIsNan(self, value, msg=None):
        r"""Assert that a value is `nan`."""
        if not _isnan(value):
            raise self.failureException(msg or "%r is not nan" % (value,))

    def assertIsFiniteOrNan(self, value, msg=None):
        r"""Assert that a value is a finite number or `nan` (but not infinite)."""
        v = float(value)
        if math.isinf(v):
            raise self.failureException(msg or "%r is infinite" % (value,))

    def assertListAlmostEqual(self, a, b, places=None, delta=None):
        r"""Assert that two iterables contain (almost) the same values.

        Elements that are `nan` in both lists are considered equal.
        """
        if places is not None and delta is not None:
            raise TypeError("Cannot use delta and places at the same time")
        if places is None and delta is None:
            places = 7
        a, b = list(a), list(b)
        if len(a) != len(b):
            raise self.failureException("Lists have different lengths (%d != %d)" % (len(a), len(b)))
        fails = []
        for i in range(len(a)):
            if a[i] == b[i] or (_isnan(a[i]) and _isnan(b[i])):
                continue
            if delta is not None:
                if not abs(a[i]-b[i]) <= delta:
                    fails.append(i)
            else:
                if not round(abs(a[i]-b[i]), places) == 0:
                    fails.append(i)
        if fails:
            msg = "%d elements differ.\n" % len(fails)
            maxN = 9
            if len(fails) <= maxN:
                msg += "Differing elements:\n"
            else:
                msg += "First few differing elements:\n"
            msg += "\n".join(["  [{i}] {a} != {b}    (difference: {d})".format(i=i, a=a[i], b=b[i], d=(b[i]-a[i]))
                              for i in fails[:maxN]])
            raise self.failureException(msg)


class TestSettings(object):
    """Global settings for tests."""
    ## Stop test run on first fail/error.
    failfast = False
    ## Whether output is buffered.\ Just information, cannot be used to toggle output buffering.
    buffering = False
    ## Whether the timing for each test case should be printed.
    timing = False
    ## Control whether tests marked as slowtest should be skipped.
    skipslow = True
