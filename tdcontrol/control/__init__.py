r"""

Control Learners
================

.. autosummary::
    :nosignatures:

    tdcontrol.control.SarsaControl
    tdcontrol.control.ExpectedSarsaControl
    tdcontrol.control.GreedyGQ
    tdcontrol.control.GQOnPolicyControl
    tdcontrol.control.OffPAC
    tdcontrol.control.ActorCritic
    tdcontrol.control.AverageRewardActorCritic

----

A control learner composes a state-action representation, one or two policies, a value predictor
and (for the actor-critic family) an actor behind a single interface:

* :func:`initialize(x0) <BaseControlLearner.initialize>` starts an episode and returns the first
  action;
* :func:`step(x_t, a_t, x_tp1, r_tp1, z_tp1) <BaseControlLearner.step>` learns from one transition
  and returns the next action;
* :func:`propose_action(x) <BaseControlLearner.propose_action>` and
  :func:`compute_value_function(x) <BaseControlLearner.compute_value_function>` evaluate the learned
  policy;
* :func:`reset`, :func:`persist` and :func:`resurrect` manage the learned weights.

Here's how to set up an off-policy learner on a small discrete environment:

.. code:: python

    import gymnasium
    import tdcontrol

    env = gymnasium.make('FrozenLake-v1', is_slippery=False)
    projector = tdcontrol.representations.OneHotProjector(env.observation_space)
    to_state_action = tdcontrol.representations.ActionStackedProjector(projector, env.action_space)

    gq = tdcontrol.predictors.GQ(to_state_action.dimension, alpha_v=0.1, alpha_w=0.01)
    target = tdcontrol.policies.Greedy(gq)
    behavior = tdcontrol.policies.EpsilonGreedy(gq, epsilon=0.1)
    learner = tdcontrol.control.GreedyGQ(target, behavior, to_state_action, gq)


Object Reference
----------------

.. autoclass:: tdcontrol.control.BaseControlLearner
.. autoclass:: tdcontrol.control.SarsaControl
.. autoclass:: tdcontrol.control.ExpectedSarsaControl
.. autoclass:: tdcontrol.control.GreedyGQ
.. autoclass:: tdcontrol.control.GQOnPolicyControl
.. autoclass:: tdcontrol.control.OffPAC
.. autoclass:: tdcontrol.control.ActorCritic
.. autoclass:: tdcontrol.control.AverageRewardActorCritic

"""

from ._base import BaseControlLearner
from ._sarsa import SarsaControl, ExpectedSarsaControl
from ._greedy_gq import GreedyGQ, GQOnPolicyControl
from ._offpac import OffPAC
from ._actor_critic import ActorCritic, AverageRewardActorCritic


__all__ = (
    'BaseControlLearner',
    'SarsaControl',
    'ExpectedSarsaControl',
    'GreedyGQ',
    'GQOnPolicyControl',
    'OffPAC',
    'ActorCritic',
    'AverageRewardActorCritic',
)
