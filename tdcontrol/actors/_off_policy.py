import jax
import haiku as hk
import optax

from ..utils import TRACE_KINDS, update_trace, zeros_like_tree
from ._base import BaseActorOffPolicy


__all__ = (
    'ActorLambdaOffPolicy',
)


class ActorLambdaOffPolicy(BaseActorOffPolicy):
    r"""

    An off-policy actor with eligibility traces, as used by :class:`tdcontrol.control.OffPAC`:

    .. math::

        e\ &\leftarrow\ \rho_t\left(\gamma_t\lambda\,e + \nabla_u\log\pi_u(a_t|s_t)\right) \\
        u\ &\leftarrow\ u + \alpha_u\,\delta_t\,e

    Note that the importance weight :math:`\rho_t` rescales the entire (decayed) trace, not only the
    new gradient.

    Parameters
    ----------
    alpha_u : positive float

        The step size of the policy parameters.

    lambda_ : float between 0 and 1

        The trace decay parameter :math:`\lambda`.

    policy_distribution : BasePolicyDistribution

        The target policy :math:`\pi_u`.

    trace_kind : {'accumulating', 'replacing'}, optional

        The kind of eligibility trace, see :func:`tdcontrol.utils.update_trace`.

    """
    def __init__(self, alpha_u, lambda_, policy_distribution, trace_kind='accumulating'):
        super().__init__(policy_distribution)
        if trace_kind not in TRACE_KINDS:
            raise ValueError(f"trace_kind must be one of {TRACE_KINDS}, got: {trace_kind!r}")
        self.alpha_u = float(alpha_u)
        self.lambda_ = float(lambda_)
        self.trace_kind = trace_kind
        self._traces = zeros_like_tree(self.params)

        def update_func(u, e, grad, rho, gamma, lambda_, alpha_u, delta):
            e = update_trace(e, gamma * lambda_, grad, rho=rho, kind=self.trace_kind)
            u = optax.apply_updates(u, jax.tree_util.tree_map(lambda e_i: alpha_u * delta * e_i, e))
            return u, e

        self._update_func = jax.jit(update_func)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({
            'alpha_u': self.alpha_u,
            'lambda_': self.lambda_,
            'trace_kind': self.trace_kind})

    @property
    def traces(self):
        r""" The eligibility traces :math:`e`, one per parameter group (never persisted). """
        return self._traces

    def _clear_traces(self):
        self._traces = zeros_like_tree(self.params)

    def update(self, phis_t, a_t, rho_t, gamma_t, delta_t):
        r"""

        Update the traces and the policy parameters.

        Parameters
        ----------
        phis_t : StateActionFeatures

            The representation :math:`\Phi(s_t)`.

        a_t : int

            The action taken (by the behavior policy).

        rho_t : float

            The importance weight :math:`\rho_t=\pi_u(a_t|s_t)/b(a_t|s_t)`.

        gamma_t : float

            The discount factor of this transition.

        delta_t : float

            The TD-error provided by the critic.

        """
        self._check_initialized()
        grad = self.policy.grad_log(phis_t, a_t)
        self.params, self._traces = self._update_func(
            self.params, self._traces, grad, rho_t, gamma_t, self.lambda_, self.alpha_u, delta_t)
