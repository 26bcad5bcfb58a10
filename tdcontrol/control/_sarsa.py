from .._base.errors import ZeroProbabilityActionError
from ..policies import sample_action, sample_best_action
from ..utils import docstring, expected_features
from ._base import BaseControlLearner, action_value_expectation


__all__ = (
    'SarsaControl',
    'ExpectedSarsaControl',
)


class SarsaControl(BaseControlLearner):
    r"""

    On-policy control with Sarsa(:math:`\lambda`). The TD-target bootstraps off the action that is
    actually sampled at the next state:

    .. math::

        G_t\ =\ R_{t+1} + \gamma\,q(S_{t+1}, A_{t+1})

    Parameters
    ----------
    acting : BasePolicy

        The policy that selects actions, typically an :class:`EpsilonGreedy
        <tdcontrol.policies.EpsilonGreedy>` over the ``sarsa`` predictor.

    to_state_action : ActionStackedProjector

        Maps an observation to its state-action representation :math:`\Phi(s)`.

    sarsa : Sarsa

        The action-value predictor.

    """
    def __init__(self, acting, to_state_action, sarsa):
        self.acting = acting
        self.to_state_action = to_state_action
        self.sarsa = sarsa
        self._phi_t = None

    @docstring(BaseControlLearner.initialize)
    def initialize(self, x0):
        self.sarsa.initialize()
        phis = self.to_state_action.state_actions(x0)
        a0 = sample_action(self.acting, phis)
        self._phi_t = phis.at(a0)
        self._initialized = True
        self.logger.debug("initialized")
        return a0

    @docstring(BaseControlLearner.step)
    def step(self, x_t, a_t, x_tp1, r_tp1, z_tp1=0.):
        self._check_initialized()
        phis_tp1 = self.to_state_action.state_actions(x_tp1)
        a_tp1 = sample_action(self.acting, phis_tp1)
        phi_tp1 = phis_tp1.at(a_tp1)
        self.sarsa.update(self._phi_t, phi_tp1, r_tp1)
        self._phi_t = phi_tp1
        return a_tp1

    def reset(self):
        self.sarsa.reset()
        self._phi_t = None
        self._initialized = False
        self.logger.debug("reset")

    def propose_action(self, x):
        return sample_best_action(self.acting, self.to_state_action.state_actions(x))

    def compute_value_function(self, x):
        phis = self.to_state_action.state_actions(x)
        return action_value_expectation(self.acting, self.sarsa, phis)

    def persist(self, filepath):
        self.sarsa.persist(filepath)

    def resurrect(self, filepath):
        self.sarsa.resurrect(filepath)


class ExpectedSarsaControl(BaseControlLearner):
    r"""

    On-policy control with Expected Sarsa. Instead of bootstrapping off the sampled next action,
    the TD-target uses the expectation over all actions under the acting policy:

    .. math::

        \bar\phi_{t+1}\ &=\ \sum_a\pi(a|S_{t+1})\,\phi(S_{t+1}, a) \\
        G_t\ &=\ R_{t+1} + \gamma\,\theta^\top\bar\phi_{t+1}

    Actions with zero probability do not contribute to :math:`\bar\phi_{t+1}`. The sampled next
    action :math:`A_{t+1}` must have non-zero probability, otherwise a
    :class:`ZeroProbabilityActionError <tdcontrol._base.errors.ZeroProbabilityActionError>` is
    raised.

    Parameters
    ----------
    acting : BasePolicy

        The policy that selects actions.

    to_state_action : ActionStackedProjector

        Maps an observation to its state-action representation :math:`\Phi(s)`.

    sarsa : Sarsa

        The action-value predictor.

    """
    def __init__(self, acting, to_state_action, sarsa):
        self.acting = acting
        self.to_state_action = to_state_action
        self.sarsa = sarsa
        self._phi_t = None

    @docstring(BaseControlLearner.initialize)
    def initialize(self, x0):
        self.sarsa.initialize()
        phis = self.to_state_action.state_actions(x0)
        a0 = sample_action(self.acting, phis)
        self._phi_t = phis.at(a0)
        self._initialized = True
        self.logger.debug("initialized")
        return a0

    @docstring(BaseControlLearner.step)
    def step(self, x_t, a_t, x_tp1, r_tp1, z_tp1=0.):
        self._check_initialized()
        phis_tp1 = self.to_state_action.state_actions(x_tp1)
        a_tp1 = sample_action(self.acting, phis_tp1)
        if self.acting.pi(a_tp1) == 0:
            raise ZeroProbabilityActionError(
                f"sampled next action {a_tp1} has zero probability under the acting policy")
        phi_bar_tp1 = expected_features(self.acting.probabilities(), phis_tp1.features)
        self.sarsa.update(self._phi_t, phi_bar_tp1, r_tp1)
        self._phi_t = phis_tp1.at(a_tp1)
        return a_tp1

    def reset(self):
        self.sarsa.reset()
        self._phi_t = None
        self._initialized = False
        self.logger.debug("reset")

    def propose_action(self, x):
        return sample_best_action(self.acting, self.to_state_action.state_actions(x))

    def compute_value_function(self, x):
        phis = self.to_state_action.state_actions(x)
        return action_value_expectation(self.acting, self.sarsa, phis)

    def persist(self, filepath):
        self.sarsa.persist(filepath)

    def resurrect(self, filepath):
        self.sarsa.resurrect(filepath)
