r"""

Representations
===============

.. autosummary::
    :nosignatures:

    tdcontrol.representations.OneHotProjector
    tdcontrol.representations.IdentityProjector
    tdcontrol.representations.ActionStackedProjector
    tdcontrol.representations.StateActionFeatures

----

A projector maps a state observation :math:`x` onto a feature vector :math:`\phi(x)`; this is what
the critics of the actor-critic learners consume. The control learners act on a per-action
representation :math:`\Phi(x)=\{\phi(x,a)\}_{a}`, which is provided by a state-action projector such
as :class:`tdcontrol.representations.ActionStackedProjector`.

Any object with a ``dimension`` attribute, an ``actions`` attribute and a ``state_actions(x)``
method that returns a :class:`StateActionFeatures` instance can be used as a state-action
projector, e.g. one based on tile coding.


Object Reference
----------------

.. autoclass:: tdcontrol.representations.OneHotProjector
.. autoclass:: tdcontrol.representations.IdentityProjector
.. autoclass:: tdcontrol.representations.ActionStackedProjector
.. autoclass:: tdcontrol.representations.StateActionFeatures

"""

from ._base import BaseProjector, StateActionFeatures
from ._projectors import OneHotProjector, IdentityProjector, ActionStackedProjector


__all__ = (
    'BaseProjector',
    'StateActionFeatures',
    'OneHotProjector',
    'IdentityProjector',
    'ActionStackedProjector',
)
