r"""@package autotaylor.report

Tabulate exact and approximate values of a comparison over a range of points.

Each row consists of ``x, exact(x), approx(x)`` (optionally followed by the
absolute difference). Values that cannot be computed show up as `nan` or
`inf`; creating the rows never fails for numerical reasons.
"""

import csv

import numpy as np


__all__ = [
    "sweep_points",
    "sweep",
    "write_csv",
]


def sweep_points(start, stop, step):
    r"""Return the equidistant points from `start` to `stop` (inclusive).

    The number of points is determined from `step` (rounding to the nearest
    integer number of steps), so that `stop` is hit exactly even if it is not
    reachable in floating point arithmetics by adding `step` repeatedly.
    """
    if step <= 0:
        raise ValueError("Step must be positive.")
    if stop < start:
        return np.array([])
    num = int(round((stop - start) / step)) + 1
    return np.linspace(start, start + (num - 1) * step, num)


def sweep(comparison, start, stop, step, with_error=False):
    r"""Generate the rows of a report for a TaylorComparison.

    @param comparison
        The taylor.TaylorComparison to evaluate.
    @param start,stop,step
        Range of points (see sweep_points()).
    @param with_error
        Whether to append the absolute difference of the two values to each
        row. Default is `False`.

    @return Generator of tuples ``(x, exact, approx)`` or
        ``(x, exact, approx, error)``.
    """
    for x in sweep_points(start, stop, step):
        x = float(x)
        exact = comparison.exact(x)
        approx = comparison.approx(x)
        if with_error:
            with np.errstate(all='ignore'):
                error = abs(approx - exact)
            yield x, exact, approx, error
        else:
            yield x, exact, approx


def write_csv(rows, stream, header=False):
    r"""Write rows as comma-separated values to a text stream.

    @param rows
        Iterable of row tuples as produced by sweep().
    @param stream
        Writable text stream (e.g. `sys.stdout` or an opened file).
    @param header
        Whether to write a header line naming the columns first.

    @return The number of rows written (excluding the header).
    """
    writer = csv.writer(stream, lineterminator='\n')
    count = 0
    for row in rows:
        if header and count == 0:
            names = ["x", "exact", "approx", "error"][:len(row)]
            writer.writerow(names)
        writer.writerow([str(v) for v in row])
        count += 1
    return count
