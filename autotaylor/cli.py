r"""@package autotaylor.cli

Command line interface.

Usage:

    python -m autotaylor [-c FILE] [-v] [-t] [--csv] [--header] [--errors]
                         [--bench] [--show] [--max-error] [--OPTION=VALUE ...]

Without any action flag, the CSV report (``x, exact, approx`` rows over the
configured sweep range) is printed. Any configuration option (see
config.TaylorConfig.defaults) can be overridden using ``--OPTION=VALUE``,
where dashes in `OPTION` may be used instead of underscores, e.g.
``--expansion-point=1.5``.

Exit codes are `0` on success and `2` for invalid arguments or
configuration.
"""

import logging
import sys

from .bench import compare
from .config import ConfigError, TaylorConfig, load_config
from .report import sweep, write_csv
from .utils import timethis


__all__ = [
    "Main",
    "main",
]


class Main(object):
    r"""Command line run of a Taylor comparison."""

    def __init__(self, *args, out=None):
        ## Remaining (not yet consumed) command line arguments.
        self.args = list(args)
        ## Stream to print results to.
        self.out = sys.stdout if out is None else out

    def pop_flag(self, *flags):
        r"""Remove all given flags from the arguments and return whether any was present."""
        found = False
        for flag in flags:
            while flag in self.args:
                self.args.remove(flag)
                found = True
        return found

    def pop_option(self, flag):
        r"""Remove an option taking a value (``-c FILE``) and return the value."""
        try:
            idx = self.args.index(flag)
        except ValueError:
            return None
        if idx + 1 >= len(self.args):
            raise ConfigError("Option %s requires a value." % flag)
        value = self.args[idx+1]
        del self.args[idx:idx+2]
        return value

    def pop_overrides(self):
        r"""Remove and return all ``--OPTION=VALUE`` arguments as a dict."""
        overrides = dict()
        rest = []
        for arg in self.args:
            if arg.startswith("--") and "=" in arg:
                key, value = arg[2:].split("=", 1)
                key = key.replace("-", "_")
                if key in TaylorConfig.defaults:
                    overrides[key] = value
                    continue
            rest.append(arg)
        self.args = rest
        return overrides

    def _print(self, *args):
        print(*args, file=self.out)

    def main(self):
        r"""Run the requested actions and return the exit code."""
        if self.pop_flag('-v', '-verbose', '--verbose'):
            logging.basicConfig(level=logging.INFO)
        timing = self.pop_flag('-t', '--timing')
        show = self.pop_flag('--show')
        bench = self.pop_flag('--bench')
        max_error = self.pop_flag('--max-error')
        csv = self.pop_flag('--csv')
        header = self.pop_flag('--header')
        errors = self.pop_flag('--errors')
        try:
            cfg_file = self.pop_option('-c')
            overrides = self.pop_overrides()
            if self.args:
                raise ConfigError("Unknown argument(s): %s" % " ".join(self.args))
            cfg = load_config(cfg_file, **overrides)
            logging.info("Configuration: %r", cfg)
            with timethis(silent=not timing):
                cmp = cfg.comparison()
                if not (show or bench or max_error):
                    csv = True
                if show:
                    self.show(cmp)
                if csv:
                    rows = sweep(cmp, cfg.sweep_start, cfg.sweep_stop,
                                 cfg.sweep_step, with_error=errors)
                    write_csv(rows, self.out, header=header)
                if max_error:
                    x, delta = cmp.max_error((cfg.sweep_start, cfg.sweep_stop))
                    self._print("max |approx - exact| = %s at x = %s" % (delta, x))
                if bench:
                    for res in compare(cmp, cfg.sweep_start, cfg.bench_step,
                                       cfg.bench_samples):
                        self._print(res)
        except ConfigError as e:
            logging.error("%s", e)
            return 2
        return 0

    def show(self, cmp):
        r"""Print the expression, derivative chain sizes and SymPy form."""
        self._print("expression: %s" % cmp.node.str())
        self._print("reference (derivative order %d): %d nodes"
                    % (cmp.diff_order, cmp.reference.size()))
        self._print("sympy: %s" % cmp.reference.to_sympy())
        sizes = [d.size() for d in cmp.series.chain]
        self._print("taylor: N=%d, a=%s, chain sizes: %s"
                    % (cmp.order, cmp.expansion_point, sizes))
        self._print("coefficients: %s" % ", ".join(str(c) for c in cmp.series.coeffs))


def main():
    r"""Entry point of the `autotaylor` console script."""
    sys.exit(Main(*sys.argv[1:]).main())


if __name__ == "__main__":
    main()
