#!/usr/bin/env python3
r"""Run the autotaylor test suite.

Usage:

    ./tests.py [-f] [-b] [-t] [-s] [--debug] [SUBDIR]

Options are `-f` (failfast), `-b` (buffer output), `-t` (print timing of
each test), `-s` (include slow tests) and `--debug` (show DEBUG log messages,
e.g. derivative chain sizes). If `SUBDIR` is given (e.g. ``autotaylor/exprs``),
only tests below that directory are run.
"""

import logging
import unittest
import os
import sys

import os.path as op
sys.path.append(op.dirname(op.realpath(__file__)))

from testutils import TestSettings


def run_tests():
    root = os.path.dirname(os.path.realpath(__file__))
    failfast = '-f' in sys.argv or '--failfast' in sys.argv
    buffering = '-b' in sys.argv or '--buffer' in sys.argv
    timing = '-t' in sys.argv or '--timing' in sys.argv
    runSlow = '-s' in sys.argv or '--run-slow-tests' in sys.argv
    if '--debug' in sys.argv:
        logging.basicConfig(level=logging.DEBUG)
    TestSettings.failfast = failfast
    TestSettings.buffering = buffering
    TestSettings.timing = timing
    TestSettings.skipslow = not runSlow
    dirs = [arg for arg in sys.argv[1:] if not arg.startswith('-')]
    start = op.join(root, dirs[0]) if dirs else root
    suite = unittest.TestLoader().discover(start, pattern="test_*.py",
                                           top_level_dir=root)
    result = unittest.TextTestRunner(verbosity=2, failfast=failfast, buffer=buffering).run(suite)
    return len(result.failures) + len(result.errors)


if __name__ == '__main__':
    sys.exit(1 if run_tests() else 0)
