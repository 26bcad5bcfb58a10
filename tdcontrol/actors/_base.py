from abc import ABC, abstractmethod

from .._base.errors import NotInitializedError
from .._base.mixins import LoggerMixin, PersistenceMixin
from ..policies import BasePolicyDistribution, sample_best_action
from ..utils import pretty_repr, zeros_like_tree


__all__ = (
    'BaseActor',
    'BaseActorOffPolicy',
)


class BaseActor(ABC, LoggerMixin, PersistenceMixin):
    r"""

    Abstract base class for actors, i.e. objects that own the parameters :math:`u` of a policy
    distribution :math:`\pi_u` and update them by following a policy gradient.

    Parameters
    ----------
    policy_distribution : BasePolicyDistribution

        The parametrized policy :math:`\pi_u`. The actor updates its :attr:`params
        <tdcontrol.policies.BasePolicyDistribution.params>` in place.

    """
    def __init__(self, policy_distribution):
        if not isinstance(policy_distribution, BasePolicyDistribution):
            raise TypeError(
                "policy_distribution must be a BasePolicyDistribution, "
                f"got: {type(policy_distribution)}")
        self._policy = policy_distribution
        self._initialized = False

    @property
    def policy(self):
        r""" The policy distribution :math:`\pi_u`. """
        return self._policy

    @property
    def params(self):
        r""" The policy parameter groups :math:`u`. """
        return self._policy.params

    @params.setter
    def params(self, new_params):
        self._policy.params = new_params

    @property
    def initialized(self):
        return self._initialized

    @property
    @abstractmethod
    def hyperparams(self):
        pass

    def initialize(self):
        r""" Start a new episode: clear the eligibility traces and allow updates. """
        self._clear_traces()
        self._initialized = True
        self.logger.debug("initialized")

    def reset(self):
        r"""

        Reset the policy parameters (and any auxiliary weights and traces) to zero. Updates are
        disallowed until the next call to :func:`initialize`.

        """
        self._policy.params = zeros_like_tree(self._policy.params)
        self._clear_traces()
        self._initialized = False
        self.logger.debug("reset")

    def pi(self, a):
        r""" The probability :math:`\pi_u(a|s)` at the state of the most recent policy update. """
        return self._policy.pi(a)

    def propose_action(self, phis):
        r"""

        Pick the most probable action under the current policy.

        Parameters
        ----------
        phis : StateActionFeatures

            The representation :math:`\Phi(s)`.

        Returns
        -------
        a : int

            The greedy action.

        """
        return sample_best_action(self._policy, phis)

    def _clear_traces(self):
        pass

    def _check_initialized(self):
        if not self._initialized:
            raise NotInitializedError(
                f"{self.__class__.__name__}.update() called before initialize()")

    def __repr__(self):
        return f"{self.__class__.__name__}({pretty_repr(dict(self.hyperparams))})"


class BaseActorOffPolicy(BaseActor):
    r"""

    Abstract base class for off-policy actors. Their :func:`update` additionally receives the
    importance weight :math:`\rho_t` and the discount factor :math:`\gamma_t`.

    """
    @abstractmethod
    def update(self, phis_t, a_t, rho_t, gamma_t, delta_t):
        pass
