r"""@package autotaylor.utils

General utilities for simplifying certain tasks in Python.
"""

import datetime
import importlib.util
import sys
import time
from timeit import default_timer
from contextlib import contextmanager


__all__ = [
    "import_file_as_module",
    "merge_dicts",
    "timethis",
]


def import_file_as_module(fname, mname='loaded_module'):
    r"""Load a Python file as module.

    Configuration files use this to refer to expressions defined in Python
    files (see exprs.library.get_expression()). Any attribute defined in the
    file can be retrieved from the returned module.
    """
    spec = importlib.util.spec_from_file_location(mname, fname)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def merge_dicts(*dicts):
    """Merge dicts into a new one, later ones replacing values of earlier ones.

    Used to layer option sources, e.g. defaults < config file < command line:

    ```
        merge_dicts(dict(order=4, dps=None), dict(order=6))
        # Result: dict(order=6, dps=None)
    ```
    """
    result = {}
    for d in dicts:
        result.update(d)
    return result


@contextmanager
def timethis(start_msg=None, end_msg="Elapsed time: {}", silent=False,
             stream=None):
    r"""Context manager for timing code execution.

    @param start_msg
        String to print at the beginning. May contain the placeholder
        ``'{now}'``, which will be replaced by the current date and time. A
        value of `True` will be taken to mean ``"Started: {now}``.
    @param end_msg
        String to print after execution. Default is ``"Elapsed time: {}"``.
    @param silent
        Whether to print anything at all.
    @param stream
        Where to print the messages. Default is `sys.stderr`, so that timing
        information does not mix with results printed to `sys.stdout`.
    """
    if silent:
        yield
        return
    if stream is None:
        stream = sys.stderr
    if start_msg is True:
        start_msg = "Started: {now}"
    if start_msg is not None:
        print(start_msg.format(now=time.strftime('%Y-%m-%d %H:%M:%S')),
              file=stream)
    start = default_timer()
    try:
        yield
    finally:
        if end_msg is not None:
            elapsed = datetime.timedelta(seconds=default_timer()-start)
            print(end_msg.format(elapsed), file=stream)
