from ..utils import docstring
from ._base import BaseControlLearner, CriticActorPersistenceMixin


__all__ = (
    'ActorCritic',
    'AverageRewardActorCritic',
)


class _OnPolicyActorCriticBase(CriticActorPersistenceMixin, BaseControlLearner):
    def __init__(self, critic, actor, projector, to_state_action):
        self.critic = critic
        self.actor = actor
        self.projector = projector
        self.to_state_action = to_state_action
        self.delta_t = 0.

    @property
    def policy(self):
        r""" The actor's policy distribution, which also selects actions. """
        return self.actor.policy

    @docstring(BaseControlLearner.initialize)
    def initialize(self, x0):
        self.critic.initialize()
        self.actor.initialize()
        self.policy.update(self.to_state_action.state_actions(x0))
        self._initialized = True
        self.logger.debug("initialized")
        return self.policy.sample_action()

    @docstring(BaseControlLearner.step)
    def step(self, x_t, a_t, x_tp1, r_tp1, z_tp1=0.):
        self._check_initialized()
        self.delta_t = self._update_critic(self.projector(x_t), self.projector(x_tp1), r_tp1)

        phis_t = self.to_state_action.state_actions(x_t)
        self.policy.update(phis_t)
        self.actor.update(phis_t, a_t, self.delta_t)

        self.policy.update(self.to_state_action.state_actions(x_tp1))
        return self.policy.sample_action()

    def reset(self):
        self.critic.reset()
        self.actor.reset()
        self.delta_t = 0.
        self._initialized = False
        self.logger.debug("reset")

    def propose_action(self, x):
        return self.actor.propose_action(self.to_state_action.state_actions(x))

    def compute_value_function(self, x):
        return float(self.critic.predict(self.projector(x)))


class ActorCritic(_OnPolicyActorCriticBase):
    r"""

    On-policy actor-critic. The critic learns state values with one-step TD (or TD(:math:`\lambda`))
    on state features, and its TD-error drives the actor:

    .. math::

        \delta_t\ &=\ R_{t+1} + \gamma\,v(S_{t+1}) - v(S_t) \\
        u\ &\leftarrow\ \texttt{actor.update}(\Phi(S_t), A_t, \delta_t)

    Actions are sampled directly from the actor's policy.

    Parameters
    ----------
    critic : TD or TDLambda

        The state-value critic.

    actor : BaseActor

        The on-policy actor, e.g. :class:`Actor <tdcontrol.actors.Actor>`.

    projector : BaseProjector

        Maps an observation to the state features :math:`\phi(s)` used by the critic.

    to_state_action : ActionStackedProjector

        Maps an observation to its state-action representation :math:`\Phi(s)`, used by the
        policy.

    """
    def _update_critic(self, phi_t, phi_tp1, r_tp1):
        return self.critic.update(phi_t, phi_tp1, r_tp1)


class AverageRewardActorCritic(_OnPolicyActorCriticBase):
    r"""

    Actor-critic for the average-reward setting. The critic learns differential state values by
    subtracting a running estimate :math:`\bar{r}` of the average reward, which is updated with the
    critic's TD-error:

    .. math::

        \delta_t\ &=\ R_{t+1} - \bar{r}_t + v(S_{t+1}) - v(S_t) \\
        \bar{r}_{t+1}\ &=\ \bar{r}_t + \alpha_r\,\delta_t

    The critic would typically be constructed with ``gamma=1``.

    Parameters
    ----------
    critic : TD or TDLambda

        The state-value critic.

    actor : BaseActor

        The on-policy actor.

    projector : BaseProjector

        Maps an observation to the state features :math:`\phi(s)` used by the critic.

    to_state_action : ActionStackedProjector

        Maps an observation to its state-action representation :math:`\Phi(s)`.

    alpha_r : positive float

        The step size of the average-reward estimate.

    """
    def __init__(self, critic, actor, projector, to_state_action, alpha_r):
        super().__init__(critic, actor, projector, to_state_action)
        self.alpha_r = float(alpha_r)
        self.average_reward = 0.

    def _update_critic(self, phi_t, phi_tp1, r_tp1):
        delta_t = self.critic.update(phi_t, phi_tp1, r_tp1 - self.average_reward)
        self.average_reward += self.alpha_r * delta_t
        return delta_t

    def reset(self):
        super().reset()
        self.average_reward = 0.
