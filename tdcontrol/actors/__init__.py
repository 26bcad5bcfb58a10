r"""

Actors
======

.. autosummary::
    :nosignatures:

    tdcontrol.actors.Actor
    tdcontrol.actors.ActorLambda
    tdcontrol.actors.ActorNatural
    tdcontrol.actors.ActorLambdaOffPolicy

----

Actors own the parameters of a policy distribution (see
:class:`tdcontrol.policies.BoltzmannDistribution`) and update them in the direction of the policy
gradient, using the TD-error of a critic as the learning signal. The on-policy actors are used by
:class:`tdcontrol.control.ActorCritic` and :class:`tdcontrol.control.AverageRewardActorCritic`;
the off-policy actor is used by :class:`tdcontrol.control.OffPAC`.


Object Reference
----------------

.. autoclass:: tdcontrol.actors.Actor
.. autoclass:: tdcontrol.actors.ActorLambda
.. autoclass:: tdcontrol.actors.ActorNatural
.. autoclass:: tdcontrol.actors.ActorLambdaOffPolicy

"""

from ._base import BaseActor, BaseActorOffPolicy
from ._on_policy import Actor, ActorLambda, ActorNatural
from ._off_policy import ActorLambdaOffPolicy


__all__ = (
    'BaseActor',
    'BaseActorOffPolicy',
    'Actor',
    'ActorLambda',
    'ActorNatural',
    'ActorLambdaOffPolicy',
)
