r"""

Policies
========

.. autosummary::
    :nosignatures:

    tdcontrol.policies.Greedy
    tdcontrol.policies.EpsilonGreedy
    tdcontrol.policies.BoltzmannPolicy
    tdcontrol.policies.RandomPolicy
    tdcontrol.policies.BoltzmannDistribution
    tdcontrol.policies.sample_action
    tdcontrol.policies.sample_best_action

----

Policies over a finite action set. A policy is first evaluated on a state representation
:math:`\Phi(s)` through :func:`update <tdcontrol.policies.BasePolicy.update>`, after which its
probabilities :math:`\pi(a|s)` can be queried and actions can be sampled. Value-based policies
derive their probabilities from an action-value predictor, whereas a policy distribution such as
:class:`BoltzmannDistribution` carries its own parameters, which are learned by an actor (see
:mod:`tdcontrol.actors`).


Object Reference
----------------

.. autoclass:: tdcontrol.policies.Greedy
.. autoclass:: tdcontrol.policies.EpsilonGreedy
.. autoclass:: tdcontrol.policies.BoltzmannPolicy
.. autoclass:: tdcontrol.policies.RandomPolicy
.. autoclass:: tdcontrol.policies.BoltzmannDistribution
.. autofunction:: tdcontrol.policies.sample_action
.. autofunction:: tdcontrol.policies.sample_best_action

"""

from ._base import BasePolicy, BasePolicyDistribution, sample_action, sample_best_action
from ._value_based import Greedy, EpsilonGreedy, BoltzmannPolicy
from ._random import RandomPolicy
from ._boltzmann_dist import BoltzmannDistribution


__all__ = (
    'BasePolicy',
    'BasePolicyDistribution',
    'Greedy',
    'EpsilonGreedy',
    'BoltzmannPolicy',
    'RandomPolicy',
    'BoltzmannDistribution',
    'sample_action',
    'sample_best_action',
)
