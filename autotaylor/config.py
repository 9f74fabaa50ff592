r"""@package autotaylor.config

Configuration of a Taylor comparison run.

Settings can be given as keyword arguments or read from INI style files with
a section ``[autotaylor]``, e.g.:

    [autotaylor]
    expression = ln_pow_pi_over_x
    diff_order = 1
    expansion_point = 2.0
    order = 5
    precision = single

When reading a file ``foo.cfg``, a file ``foo.mine.cfg`` next to it is read
as well (if it exists) and overrides any values of the former. This allows
keeping personal settings out of shared configuration files.

The `expression` option is either the name of a built-in expression (see
exprs.library.EXPRESSIONS) or a reference ``"file.py:attr"`` to an expression
defined in a Python file.
"""

from configparser import ConfigParser, Error as ConfigParserError
import logging
import os.path as op

from .exprs.context import PRECISIONS
from .exprs.library import get_expression
from .taylor import TaylorComparison
from .utils import merge_dicts


__all__ = [
    "ConfigError",
    "TaylorConfig",
    "load_config",
]


## Name of the section read from configuration files.
SECTION = 'autotaylor'


class ConfigError(ValueError):
    r"""Raised for invalid configuration files or values."""
    pass


def _to_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ('1', 'yes', 'true', 'on'):
            return True
        if v in ('0', 'no', 'false', 'off'):
            return False
        raise ValueError("not a boolean: %r" % value)
    return bool(value)


def _to_int(value):
    if isinstance(value, bool):
        raise ValueError("not an integer: %r" % value)
    if isinstance(value, str):
        return int(value.strip())
    if int(value) != value:
        raise ValueError("not an integer: %r" % value)
    return int(value)


def _to_optional_int(value):
    if value is None or (isinstance(value, str) and value.strip().lower() in ('', 'none')):
        return None
    return _to_int(value)


def _to_str(value):
    return str(value).strip()


class TaylorConfig(object):
    r"""Settings of a comparison between an expression and its Taylor series.

    All options are available as attributes of the same name. Objects should
    be treated as read-only; use update() to create modified copies.
    """

    ## Default values of all recognized options.
    defaults = dict(
        expression='ln_pow_pi_over_x',
        diff_order=0,
        expansion_point=2.0,
        order=4,
        precision='single',
        use_mp=False,
        dps=None,
        sweep_start=1.25,
        sweep_stop=3.0,
        sweep_step=0.25,
        bench_samples=100000,
        bench_step=1e-7,
    )

    ## Functions converting (possibly string) values of each option.
    converters = dict(
        expression=_to_str,
        diff_order=_to_int,
        expansion_point=float,
        order=_to_int,
        precision=_to_str,
        use_mp=_to_bool,
        dps=_to_optional_int,
        sweep_start=float,
        sweep_stop=float,
        sweep_step=float,
        bench_samples=_to_int,
        bench_step=float,
    )

    def __init__(self, **options):
        r"""Create a configuration.

        Any option not given takes its default value from #defaults.

        @raise ConfigError for unknown options or invalid values.
        """
        unknown = sorted(set(options) - set(self.defaults))
        if unknown:
            raise ConfigError("Unknown option(s): %s" % ", ".join(unknown))
        for key, value in merge_dicts(self.defaults, options).items():
            if isinstance(value, str) or key in options:
                try:
                    value = self.converters[key](value)
                except (TypeError, ValueError) as e:
                    raise ConfigError("Invalid value for '%s': %s" % (key, e))
            setattr(self, key, value)
        self._validate()

    def _validate(self):
        if self.order < 1:
            raise ConfigError("Taylor order must be positive, got %d." % self.order)
        if self.diff_order < 0:
            raise ConfigError("Differentiation order must be non-negative, got %d."
                              % self.diff_order)
        if self.precision not in PRECISIONS:
            raise ConfigError("Unknown precision '%s'. Valid values: %s"
                              % (self.precision, ", ".join(sorted(PRECISIONS))))
        if self.sweep_step <= 0:
            raise ConfigError("Sweep step must be positive.")
        if self.bench_samples < 1:
            raise ConfigError("Number of benchmark samples must be positive.")
        if self.dps is not None and self.dps < 1:
            raise ConfigError("Decimal places must be positive.")

    def __repr__(self):
        opts = ", ".join("%s=%r" % (k, getattr(self, k)) for k in sorted(self.defaults))
        return "<TaylorConfig(%s)>" % opts

    def __eq__(self, other):
        if not isinstance(other, TaylorConfig):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def as_dict(self):
        r"""Return all options as a dictionary."""
        return dict((k, getattr(self, k)) for k in self.defaults)

    def update(self, **options):
        r"""Return a copy with the given options replaced."""
        return type(self)(**merge_dicts(self.as_dict(), options))

    @classmethod
    def from_file(cls, filename, **overrides):
        r"""Read a configuration file (and its ``.mine.cfg`` companion).

        Options given as keyword arguments take precedence over values read
        from the files.
        """
        filename = op.expanduser(filename)
        if not op.isfile(filename):
            raise ConfigError("Configuration file not found: %s" % filename)
        base, ext = op.splitext(filename)
        files = [filename, "%s.mine%s" % (base, ext or '.cfg')]
        # values are taken literally, e.g. `%` in file names
        parser = ConfigParser(interpolation=None)
        try:
            read = parser.read(files)
            options = dict()
            if parser.has_section(SECTION):
                options = dict(parser.items(SECTION))
        except ConfigParserError as e:
            raise ConfigError("Could not parse configuration: %s" % e)
        logging.info("Configuration read from: %s", ", ".join(read))
        return cls(**merge_dicts(options, overrides))

    def build_expression(self):
        r"""Create the root expression node."""
        try:
            return get_expression(self.expression)
        except (KeyError, TypeError) as e:
            raise ConfigError("Invalid expression '%s': %s" % (self.expression, e))

    def comparison(self):
        r"""Create the TaylorComparison described by this configuration."""
        return TaylorComparison(
            self.build_expression(),
            expansion_point=self.expansion_point,
            order=self.order,
            diff_order=self.diff_order,
            use_mp=self.use_mp,
            precision=self.precision,
            dps=self.dps,
        )


def load_config(filename=None, **overrides):
    r"""Return the configuration from a file (if given) with overrides applied."""
    if filename is None:
        return TaylorConfig(**overrides)
    return TaylorConfig.from_file(filename, **overrides)
