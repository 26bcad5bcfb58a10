from ..policies import sample_action
from ..utils import DEFAULT_BOUND, check_bounded, docstring, importance_weight
from ._base import BaseControlLearner, CriticActorPersistenceMixin


__all__ = (
    'OffPAC',
)


class OffPAC(CriticActorPersistenceMixin, BaseControlLearner):
    r"""

    Off-policy actor-critic (Off-PAC). Actions are selected by a behavior policy :math:`b`. The
    critic learns the state values of the actor's target policy :math:`\pi_u` with
    GTD(:math:`\lambda`) on state features, and the actor follows the importance-weighted policy
    gradient:

    .. math::

        \rho_t\ &=\ \frac{\pi_u(A_t|S_t)}{b(A_t|S_t)} \\
        \delta_t\ &=\ \texttt{critic.update}(\phi(S_t), \phi(S_{t+1}), \rho_t, \gamma,
            R_{t+1}, Z_{t+1}) \\
        u\ &\leftarrow\ \texttt{actor.update}(\Phi(S_t), A_t, \rho_t, \gamma, \delta_t)

    Both :math:`\rho_t` and :math:`\delta_t` must be finite and bounded, otherwise learning stops
    with a :class:`BoundednessError <tdcontrol._base.errors.BoundednessError>`.

    Parameters
    ----------
    behavior : BasePolicy

        The behavior policy :math:`b` that selects actions.

    critic : GTDLambda

        The state-value critic.

    actor : BaseActorOffPolicy

        The off-policy actor, e.g. :class:`ActorLambdaOffPolicy
        <tdcontrol.actors.ActorLambdaOffPolicy>`.

    to_state_action : ActionStackedProjector

        Maps an observation to its state-action representation :math:`\Phi(s)`, used by the
        policies.

    projector : BaseProjector

        Maps an observation to the state features :math:`\phi(s)` used by the critic.

    gamma : float between 0 and 1

        The discount factor.

    bound : positive float, optional

        The largest allowed absolute value of :math:`\rho_t` and :math:`\delta_t`.

    """
    def __init__(
            self, behavior, critic, actor, to_state_action, projector, gamma,
            bound=DEFAULT_BOUND):
        self.behavior = behavior
        self.critic = critic
        self.actor = actor
        self.to_state_action = to_state_action
        self.projector = projector
        self.gamma = float(gamma)
        self.bound = float(bound)
        self.rho_t = 0.
        self.delta_t = 0.

    @docstring(BaseControlLearner.initialize)
    def initialize(self, x0):
        self.critic.initialize()
        self.actor.initialize()
        self._initialized = True
        self.logger.debug("initialized")
        return sample_action(self.behavior, self.to_state_action.state_actions(x0))

    @docstring(BaseControlLearner.step)
    def step(self, x_t, a_t, x_tp1, r_tp1, z_tp1=0.):
        self._check_initialized()
        phi_t = self.projector(x_t)
        phi_tp1 = self.projector(x_tp1)

        phis_t = self.to_state_action.state_actions(x_t)
        self.actor.policy.update(phis_t)
        self.behavior.update(phis_t)
        self.rho_t = check_bounded(
            importance_weight(self.actor.pi(a_t), self.behavior.pi(a_t)), self.bound, 'rho_t')

        delta_t = self.critic.update(phi_t, phi_tp1, self.rho_t, self.gamma, r_tp1, z_tp1)
        self.delta_t = check_bounded(delta_t, self.bound, 'delta_t')
        self.actor.update(phis_t, a_t, self.rho_t, self.gamma, self.delta_t)

        return sample_action(self.behavior, self.to_state_action.state_actions(x_tp1))

    def reset(self):
        self.critic.reset()
        self.actor.reset()
        self.rho_t = self.delta_t = 0.
        self._initialized = False
        self.logger.debug("reset")

    def propose_action(self, x):
        return self.actor.propose_action(self.to_state_action.state_actions(x))

    def compute_value_function(self, x):
        return float(self.critic.predict(self.projector(x)))
