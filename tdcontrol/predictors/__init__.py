r"""

Predictors
==========

.. autosummary::
    :nosignatures:

    tdcontrol.predictors.TD
    tdcontrol.predictors.TDLambda
    tdcontrol.predictors.Sarsa
    tdcontrol.predictors.GTDLambda
    tdcontrol.predictors.GQ

----

Linear value predictors :math:`v(\phi)=\theta^\top\phi` that learn from one transition at a time.
:class:`TD` and :class:`TDLambda` serve as on-policy critics, :class:`GTDLambda` as an off-policy
critic, while :class:`Sarsa` and :class:`GQ` learn action values over state-action features.

Each predictor follows the same lifecycle: :func:`initialize` clears the eligibility traces at the
start of an episode, :func:`update` processes a single transition and returns the TD-error and
:func:`reset` sets all weights back to zero. Calling :func:`update` before :func:`initialize`
raises a :class:`NotInitializedError <tdcontrol._base.errors.NotInitializedError>`.


Object Reference
----------------

.. autoclass:: tdcontrol.predictors.TD
.. autoclass:: tdcontrol.predictors.TDLambda
.. autoclass:: tdcontrol.predictors.Sarsa
.. autoclass:: tdcontrol.predictors.GTDLambda
.. autoclass:: tdcontrol.predictors.GQ

"""

from ._base import BasePredictor
from ._td import TD, TDLambda, Sarsa
from ._gtd import GTDLambda, GQ, gradient_td_update


__all__ = (
    'BasePredictor',
    'TD',
    'TDLambda',
    'Sarsa',
    'GTDLambda',
    'GQ',
    'gradient_td_update',
)
