from ..policies import sample_action, sample_best_action
from ..utils import DEFAULT_BOUND, check_bounded, docstring, expected_features, importance_weight
from ._base import BaseControlLearner, action_value_expectation


__all__ = (
    'GreedyGQ',
    'GQOnPolicyControl',
)


class GreedyGQ(BaseControlLearner):
    r"""

    Off-policy control with Greedy-GQ(:math:`\lambda`). Actions are selected by an exploratory
    behavior policy :math:`b`, while the action values of a target policy :math:`\pi` (typically
    greedy with respect to those same values) are learned with the two-timescale GQ update, see
    :class:`tdcontrol.predictors.GQ`.

    At each step, the importance weight and the bootstrap features are:

    .. math::

        \rho_t\ &=\ \frac{\pi(A_t|S_t)}{b(A_t|S_t)} \\
        \bar\phi_{t+1}\ &=\ \sum_a\pi(a|S_{t+1})\,\phi(S_{t+1}, a)

    Calling :func:`propose_action` or :func:`compute_value_function` between two steps leaves the
    target policy evaluated at the current state, so it does not affect the next :math:`\rho_t`.

    Parameters
    ----------
    target : BasePolicy

        The target policy :math:`\pi`, e.g. :class:`Greedy <tdcontrol.policies.Greedy>` over ``gq``.

    behavior : BasePolicy

        The behavior policy :math:`b` that selects actions.

    to_state_action : ActionStackedProjector

        Maps an observation to its state-action representation :math:`\Phi(s)`.

    gq : GQ

        The action-value predictor.

    bound : positive float, optional

        The largest allowed absolute value of :math:`\rho_t` and :math:`\delta_t`. Learning stops
        with a :class:`BoundednessError <tdcontrol._base.errors.BoundednessError>` if exceeded.

    """
    def __init__(self, target, behavior, to_state_action, gq, bound=DEFAULT_BOUND):
        self.target = target
        self.behavior = behavior
        self.to_state_action = to_state_action
        self.gq = gq
        self.bound = float(bound)
        self.rho_t = 0.
        self.delta_t = 0.
        self._phi_t = None

    @docstring(BaseControlLearner.initialize)
    def initialize(self, x0):
        self.gq.initialize()
        phis = self.to_state_action.state_actions(x0)
        self.target.update(phis)
        a0 = sample_action(self.behavior, phis)
        self._phi_t = phis.at(a0)
        self._initialized = True
        self.logger.debug("initialized")
        return a0

    def compute_rho(self, a_t):
        r"""

        Compute the importance weight :math:`\rho_t=\pi(a_t|s_t)/b(a_t|s_t)` at the state at which
        both policies were most recently evaluated.

        Parameters
        ----------
        a_t : int

            The action that was executed.

        Returns
        -------
        rho_t : float

            The importance weight.

        """
        return importance_weight(self.target.pi(a_t), self.behavior.pi(a_t))

    @docstring(BaseControlLearner.step)
    def step(self, x_t, a_t, x_tp1, r_tp1, z_tp1=0.):
        self._check_initialized()
        self.rho_t = check_bounded(self.compute_rho(a_t), self.bound, 'rho_t')

        phis_tp1 = self.to_state_action.state_actions(x_tp1)
        self.target.update(phis_tp1)
        phi_bar_tp1 = expected_features(self.target.probabilities(), phis_tp1.features)
        delta_t = self.gq.update(self._phi_t, phi_bar_tp1, self.rho_t, r_tp1, z_tp1)
        self.delta_t = check_bounded(delta_t, self.bound, 'delta_t')

        # refresh the target at s_tp1 with the new weights, for next step's rho
        self.target.update(phis_tp1)
        a_tp1 = sample_action(self.behavior, phis_tp1)
        self._phi_t = phis_tp1.at(a_tp1)
        return a_tp1

    def reset(self):
        self.gq.reset()
        self._phi_t = None
        self.rho_t = self.delta_t = 0.
        self._initialized = False
        self.logger.debug("reset")

    def propose_action(self, x):
        phis = self.to_state_action.state_actions(x)
        return self._evaluate_target(sample_best_action, self.target, phis)

    def compute_value_function(self, x):
        phis = self.to_state_action.state_actions(x)
        return self._evaluate_target(action_value_expectation, self.target, self.gq, phis)

    def _evaluate_target(self, func, *args):
        # the next compute_rho must still see the target evaluated at x_t
        state = self.target.evaluated_state
        try:
            return func(*args)
        finally:
            self.target.evaluated_state = state

    def persist(self, filepath):
        self.gq.persist(filepath)

    def resurrect(self, filepath):
        self.gq.resurrect(filepath)


class GQOnPolicyControl(GreedyGQ):
    r"""

    On-policy control with GQ(:math:`\lambda`). This is :class:`GreedyGQ` with a single policy
    that serves both as target and as behavior policy, so the importance weight is always
    :math:`\rho_t=1`.

    Parameters
    ----------
    acting : BasePolicy

        The policy that selects actions and whose action values are learned.

    to_state_action : ActionStackedProjector

        Maps an observation to its state-action representation :math:`\Phi(s)`.

    gq : GQ

        The action-value predictor.

    bound : positive float, optional

        The largest allowed absolute value of :math:`\delta_t`.

    """
    def __init__(self, acting, to_state_action, gq, bound=DEFAULT_BOUND):
        super().__init__(acting, acting, to_state_action, gq, bound=bound)

    def compute_rho(self, a_t):
        return 1.0
