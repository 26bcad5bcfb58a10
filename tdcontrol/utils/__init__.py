r"""

Utilities
=========

This is a collection of utility (helper) functions used throughout the package.

.. autosummary::
    :nosignatures:

    tdcontrol.utils.argmax
    tdcontrol.utils.check_bounded
    tdcontrol.utils.check_features
    tdcontrol.utils.docstring
    tdcontrol.utils.dump
    tdcontrol.utils.enable_logging
    tdcontrol.utils.expected_features
    tdcontrol.utils.expected_value
    tdcontrol.utils.importance_weight
    tdcontrol.utils.load
    tdcontrol.utils.pretty_repr
    tdcontrol.utils.update_trace
    tdcontrol.utils.zeros_like_tree


Object Reference
----------------

.. autofunction:: tdcontrol.utils.argmax
.. autofunction:: tdcontrol.utils.check_bounded
.. autofunction:: tdcontrol.utils.check_features
.. autofunction:: tdcontrol.utils.docstring
.. autofunction:: tdcontrol.utils.dump
.. autofunction:: tdcontrol.utils.enable_logging
.. autofunction:: tdcontrol.utils.expected_features
.. autofunction:: tdcontrol.utils.expected_value
.. autofunction:: tdcontrol.utils.importance_weight
.. autofunction:: tdcontrol.utils.load
.. autofunction:: tdcontrol.utils.pretty_repr
.. autofunction:: tdcontrol.utils.update_trace
.. autofunction:: tdcontrol.utils.zeros_like_tree

"""

from ._array import argmax, check_features, zeros_like_tree
from ._linear import (
    DEFAULT_BOUND,
    TRACE_KINDS,
    check_bounded,
    expected_features,
    expected_value,
    importance_weight,
    update_trace,
)
from ._misc import (
    docstring,
    dump,
    enable_logging,
    load,
    pretty_repr,
)


__all__ = (
    'DEFAULT_BOUND',
    'TRACE_KINDS',
    'argmax',
    'check_bounded',
    'check_features',
    'docstring',
    'dump',
    'enable_logging',
    'expected_features',
    'expected_value',
    'importance_weight',
    'load',
    'pretty_repr',
    'update_trace',
    'zeros_like_tree',
)
