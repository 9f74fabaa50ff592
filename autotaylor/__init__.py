r"""@package autotaylor

Symbolic differentiation and truncated Taylor series of scalar expressions.

Expressions are built from the node classes in autotaylor.exprs and can be
differentiated any number of times symbolically. The module autotaylor.taylor
uses the resulting derivative chains to evaluate truncated Taylor series,
which can be compared against the exact expression (see
taylor.TaylorComparison), tabulated (autotaylor.report) and timed
(autotaylor.bench). A command line front end is available in autotaylor.cli.
"""
