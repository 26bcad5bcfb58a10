import jax
import jax.numpy as jnp
import haiku as hk
import optax

from .._base.errors import DimensionError
from ..utils import TRACE_KINDS, update_trace, zeros_like_tree
from ._base import BaseActor


__all__ = (
    'Actor',
    'ActorLambda',
    'ActorNatural',
)


class Actor(BaseActor):
    r"""

    A vanilla policy-gradient actor:

    .. math::

        u\ \leftarrow\ u + \alpha_u\,\delta_t\,\nabla_u\log\pi_u(a_t|s_t)

    where the TD-error :math:`\delta_t` is supplied by a critic and plays the role of a
    baseline-corrected return.

    Parameters
    ----------
    alpha_u : positive float

        The step size of the policy parameters.

    policy_distribution : BasePolicyDistribution

        The parametrized policy :math:`\pi_u`.

    """
    def __init__(self, alpha_u, policy_distribution):
        super().__init__(policy_distribution)
        self.alpha_u = float(alpha_u)

        def update_func(u, grad, alpha_u, delta):
            step = jax.tree_util.tree_map(lambda g: alpha_u * delta * g, grad)
            return optax.apply_updates(u, step)

        self._update_func = jax.jit(update_func)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({'alpha_u': self.alpha_u})

    def update(self, phis_t, a_t, delta_t):
        r"""

        Update the policy parameters.

        Parameters
        ----------
        phis_t : StateActionFeatures

            The representation :math:`\Phi(s_t)`.

        a_t : int

            The action taken.

        delta_t : float

            The TD-error provided by the critic.

        """
        self._check_initialized()
        grad = self.policy.grad_log(phis_t, a_t)
        self.params = self._update_func(self.params, grad, self.alpha_u, delta_t)


class ActorLambda(BaseActor):
    r"""

    A policy-gradient actor with eligibility traces:

    .. math::

        e\ &\leftarrow\ \gamma\lambda\,e + \nabla_u\log\pi_u(a_t|s_t) \\
        u\ &\leftarrow\ u + \alpha_u\,\delta_t\,e

    Parameters
    ----------
    alpha_u : positive float

        The step size of the policy parameters.

    gamma : float between 0 and 1

        The discount factor :math:`\gamma`.

    lambda_ : float between 0 and 1

        The trace decay parameter :math:`\lambda`.

    policy_distribution : BasePolicyDistribution

        The parametrized policy :math:`\pi_u`.

    trace_kind : {'accumulating', 'replacing'}, optional

        The kind of eligibility trace, see :func:`tdcontrol.utils.update_trace`.

    """
    def __init__(self, alpha_u, gamma, lambda_, policy_distribution, trace_kind='accumulating'):
        super().__init__(policy_distribution)
        if trace_kind not in TRACE_KINDS:
            raise ValueError(f"trace_kind must be one of {TRACE_KINDS}, got: {trace_kind!r}")
        self.alpha_u = float(alpha_u)
        self.gamma = float(gamma)
        self.lambda_ = float(lambda_)
        self.trace_kind = trace_kind
        self._traces = zeros_like_tree(self.params)

        def update_func(u, e, grad, alpha_u, gamma, lambda_, delta):
            e = update_trace(e, gamma * lambda_, grad, kind=self.trace_kind)
            u = optax.apply_updates(u, jax.tree_util.tree_map(lambda e_i: alpha_u * delta * e_i, e))
            return u, e

        self._update_func = jax.jit(update_func)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({
            'alpha_u': self.alpha_u,
            'gamma': self.gamma,
            'lambda_': self.lambda_,
            'trace_kind': self.trace_kind})

    @property
    def traces(self):
        r""" The eligibility traces :math:`e`, one per parameter group (never persisted). """
        return self._traces

    def _clear_traces(self):
        self._traces = zeros_like_tree(self.params)

    def update(self, phis_t, a_t, delta_t):
        r"""

        Update the traces and the policy parameters.

        Parameters
        ----------
        phis_t : StateActionFeatures

            The representation :math:`\Phi(s_t)`.

        a_t : int

            The action taken.

        delta_t : float

            The TD-error provided by the critic.

        """
        self._check_initialized()
        grad = self.policy.grad_log(phis_t, a_t)
        self.params, self._traces = self._update_func(
            self.params, self._traces, grad, self.alpha_u, self.gamma, self.lambda_, delta_t)


class ActorNatural(BaseActor):
    r"""

    A natural-gradient actor. It fits secondary weights :math:`w` to the advantage function
    :math:`A(s,a)\approx w^\top\nabla_u\log\pi_u(a|s)`, which estimate the natural policy gradient:

    .. math::

        \hat{A}_t\ &=\ w^\top\nabla_u\log\pi_u(a_t|s_t) \\
        w\ &\leftarrow\ w + \alpha_v\,(\delta_t - \hat{A}_t)\,\nabla_u\log\pi_u(a_t|s_t) \\
        u\ &\leftarrow\ u + \alpha_u\,w

    Parameters
    ----------
    alpha_u : positive float

        The step size of the policy parameters.

    alpha_v : positive float

        The step size of the advantage weights :math:`w`.

    policy_distribution : BasePolicyDistribution

        The parametrized policy :math:`\pi_u`.

    """
    def __init__(self, alpha_u, alpha_v, policy_distribution):
        super().__init__(policy_distribution)
        self.alpha_u = float(alpha_u)
        self.alpha_v = float(alpha_v)
        self._w = zeros_like_tree(self.params)

        def update_func(u, w, grad, alpha_u, alpha_v, delta):
            advantage = sum(
                jnp.vdot(g, w_i) for g, w_i in zip(
                    jax.tree_util.tree_leaves(grad), jax.tree_util.tree_leaves(w)))
            w = jax.tree_util.tree_map(
                lambda w_i, g: w_i + alpha_v * (delta - advantage) * g, w, grad)
            u = optax.apply_updates(u, jax.tree_util.tree_map(lambda w_i: alpha_u * w_i, w))
            return u, w

        self._update_func = jax.jit(update_func)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({
            'alpha_u': self.alpha_u,
            'alpha_v': self.alpha_v})

    @property
    def advantage_weights(self):
        r""" The advantage weights :math:`w`, one per parameter group. """
        return self._w

    def reset(self):
        super().reset()
        self._w = zeros_like_tree(self.params)

    def update(self, phis_t, a_t, delta_t):
        r"""

        Update the advantage weights and the policy parameters.

        Parameters
        ----------
        phis_t : StateActionFeatures

            The representation :math:`\Phi(s_t)`.

        a_t : int

            The action taken.

        delta_t : float

            The TD-error provided by the critic.

        """
        self._check_initialized()
        grad = self.policy.grad_log(phis_t, a_t)
        if jax.tree_util.tree_structure(grad) != jax.tree_util.tree_structure(self._w):
            raise DimensionError("gradient structure does not match the advantage weights")
        self.params, self._w = self._update_func(
            self.params, self._w, grad, self.alpha_u, self.alpha_v, delta_t)
