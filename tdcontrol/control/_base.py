from abc import ABC, abstractmethod

from .._base.errors import NotInitializedError
from .._base.mixins import LoggerMixin
from ..utils import expected_value


__all__ = (
    'BaseControlLearner',
)


class BaseControlLearner(ABC, LoggerMixin):
    r"""

    Abstract base class for online control learners.

    A control learner is driven one transition at a time. A typical loop looks like:

    .. code:: python

        s, info = env.reset()
        a = learner.initialize(s)

        for t in range(env.spec.max_episode_steps):
            s_next, r, done, truncated, info = env.step(a)
            a = learner.step(s, a, s_next, r)
            if done or truncated:
                break

            s = s_next

    The learner is in one of two states. It is *uninitialized* after construction and after
    :func:`reset`; it becomes *ready* after :func:`initialize`. Calling :func:`step` on an
    uninitialized learner raises a :class:`NotInitializedError
    <tdcontrol._base.errors.NotInitializedError>`.

    """
    _initialized = False

    @property
    def initialized(self):
        r""" Whether :func:`initialize` has been called since construction or the last reset. """
        return self._initialized

    @abstractmethod
    def initialize(self, x0):
        r"""

        Start a new episode.

        Parameters
        ----------
        x0 : observation

            The initial observation.

        Returns
        -------
        a0 : int

            The first action to execute.

        """
        pass

    @abstractmethod
    def step(self, x_t, a_t, x_tp1, r_tp1, z_tp1=0.):
        r"""

        Learn from a single transition and pick the next action.

        Parameters
        ----------
        x_t : observation

            The observation of the current state.

        a_t : int

            The action that was executed.

        x_tp1 : observation

            The observation of the next state.

        r_tp1 : float

            The reward.

        z_tp1 : float, optional

            The outcome signal. Only the gradient-TD learners use it; it enters their TD-target
            with weight :math:`1-\gamma`.

        Returns
        -------
        a_tp1 : int

            The next action to execute.

        """
        pass

    @abstractmethod
    def reset(self):
        r""" Reset all learned weights and traces. The learner must be re-initialized. """
        pass

    @abstractmethod
    def propose_action(self, x):
        r"""

        Pick the best action according to the policy that is being learned, without exploration.

        Parameters
        ----------
        x : observation

            An observation.

        Returns
        -------
        a : int

            The proposed action.

        """
        pass

    @abstractmethod
    def compute_value_function(self, x):
        r"""

        Estimate the state value :math:`v(s)`.

        Parameters
        ----------
        x : observation

            An observation.

        Returns
        -------
        v : float

            The estimated state value.

        """
        pass

    @abstractmethod
    def persist(self, filepath):
        r"""

        Store the learned weights. Eligibility traces are not stored.

        Parameters
        ----------
        filepath : str

            The filepath to store the weights. Learners with a critic and an actor write two files,
            see :class:`CriticActorPersistenceMixin`.

        """
        pass

    @abstractmethod
    def resurrect(self, filepath):
        r"""

        Restore the learned weights from a file that was created by :func:`persist`.

        Parameters
        ----------
        filepath : str

            The filepath of the stored weights.

        """
        pass

    def _check_initialized(self):
        if not self._initialized:
            raise NotInitializedError(
                f"{self.__class__.__name__}.step() called before initialize()")


class CriticActorPersistenceMixin:
    r"""

    Persistence for learners that consist of a critic and an actor. Both are stored side by side,
    in ``filepath + '.critic'`` and ``filepath + '.actor'``.

    """
    def persist(self, filepath):
        self.critic.persist(filepath + '.critic')
        self.actor.persist(filepath + '.actor')

    def resurrect(self, filepath):
        self.critic.resurrect(filepath + '.critic')
        self.actor.resurrect(filepath + '.actor')


def action_value_expectation(policy, predictor, phis):
    r"""

    Compute :math:`v(s)=\sum_a\pi(a|s)\,q(s,a)`, refreshing the policy at :math:`\Phi(s)` first.

    """
    policy.update(phis)
    return expected_value(policy.probabilities(), predictor.predict(phis.features))
