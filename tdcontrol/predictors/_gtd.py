import jax
import jax.numpy as jnp
import haiku as hk
import optax

from ..utils import TRACE_KINDS, check_features, update_trace
from ._base import BasePredictor


__all__ = (
    'GTDLambda',
    'GQ',
)


def gradient_td_update(
        params, e, phi_t, phi_tp1, rho_t, gamma, lambda_, r_tp1, z_tp1, alpha_v, alpha_w,
        trace_kind='accumulating', action_values=False):
    r"""

    The two-timescale gradient-TD recursion shared by GTD(:math:`\lambda`) and GQ(:math:`\lambda`):

    .. math::

        \delta_t\ &=\ r_{t+1} + (1-\gamma)\,z_{t+1} + \gamma\,\theta^\top\phi_{t+1}
            - \theta^\top\phi_t \\
        \theta\ &\leftarrow\ \theta + \alpha_v\,\left(\delta_t\,e
            - \gamma(1-\lambda)\,(w^\top e)\,\phi_{t+1}\right) \\
        w\ &\leftarrow\ w + \alpha_w\,\left(\delta_t\,e - (w^\top\phi_t)\,\phi_t\right)

    The trace is updated before the weights. For state values (GTD), the importance weight
    rescales the whole trace:

    .. math::

        e\ \leftarrow\ \rho_t\,(\gamma\lambda\,e + \phi_t)

    For action values (GQ), the features :math:`\phi_t=\phi(s_t,a_t)` already condition on the
    executed action, so only the carried trace is rescaled:

    .. math::

        e\ \leftarrow\ \phi_t + \gamma\lambda\rho_t\,e

    Returns
    -------
    params, e, delta : pytree, pytree, scalar

        The new weights, the new trace and the TD-error.

    """
    theta, w = params['theta'], params['w']
    delta = r_tp1 + (1 - gamma) * z_tp1 + gamma * jnp.dot(theta, phi_tp1) - jnp.dot(theta, phi_t)
    if action_values:
        e = update_trace(e, gamma * lambda_ * rho_t, {'theta': phi_t}, kind=trace_kind)
    else:
        e = update_trace(e, gamma * lambda_, {'theta': phi_t}, rho=rho_t, kind=trace_kind)
    e_theta = e['theta']
    updates = {
        'theta': alpha_v * (
            delta * e_theta - gamma * (1 - lambda_) * jnp.dot(w, e_theta) * phi_tp1),
        'w': alpha_w * (delta * e_theta - jnp.dot(w, phi_t) * phi_t),
    }
    return optax.apply_updates(params, updates), e, delta


class _GradientTDBase(BasePredictor):
    _action_values = False

    def __init__(self, dimension, alpha_v, alpha_w, lambda_, trace_kind):
        super().__init__(dimension)
        if trace_kind not in TRACE_KINDS:
            raise ValueError(f"trace_kind must be one of {TRACE_KINDS}, got: {trace_kind!r}")
        self.alpha_v = float(alpha_v)
        self.alpha_w = float(alpha_w)
        self.lambda_ = float(lambda_)
        self.trace_kind = trace_kind

        def update_func(params, e, phi_t, phi_tp1, rho_t, gamma, lambda_, r_tp1, z_tp1,
                        alpha_v, alpha_w):
            return gradient_td_update(
                params, e, phi_t, phi_tp1, rho_t, gamma, lambda_, r_tp1, z_tp1, alpha_v, alpha_w,
                self.trace_kind, self._action_values)

        self._update_func = jax.jit(update_func)

    def default_params(self):
        return {'theta': jnp.zeros(self.dimension), 'w': jnp.zeros(self.dimension)}

    def default_traces(self):
        return {'theta': jnp.zeros(self.dimension)}

    def _update(self, phi_t, phi_tp1, rho_t, gamma, r_tp1, z_tp1):
        self._check_initialized()
        phi_t = check_features(phi_t, self.dimension, 'phi_t')
        phi_tp1 = check_features(phi_tp1, self.dimension, 'phi_tp1')
        self._params, self._traces, delta = self._update_func(
            self._params, self._traces, phi_t, phi_tp1, rho_t, gamma, self.lambda_,
            r_tp1, z_tp1, self.alpha_v, self.alpha_w)
        return float(delta)


class GTDLambda(_GradientTDBase):
    r"""

    Off-policy GTD(:math:`\lambda`) with linear function approximation, see
    :func:`gradient_td_update` for the update rule. The secondary weights :math:`w` are learned on
    a faster timescale (typically :math:`\alpha_w>\alpha_v`).

    Parameters
    ----------
    dimension : positive int

        The dimension of the state feature vectors.

    alpha_v : positive float, optional

        The step size of the primary weights :math:`\theta`.

    alpha_w : positive float, optional

        The step size of the secondary weights :math:`w`.

    lambda_ : float between 0 and 1, optional

        The trace decay parameter :math:`\lambda`.

    trace_kind : {'accumulating', 'replacing'}, optional

        The kind of eligibility trace, see :func:`tdcontrol.utils.update_trace`.

    """
    def __init__(self, dimension, alpha_v=0.1, alpha_w=0.01, lambda_=0.9,
                 trace_kind='accumulating'):
        super().__init__(dimension, alpha_v, alpha_w, lambda_, trace_kind)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({
            'alpha_v': self.alpha_v,
            'alpha_w': self.alpha_w,
            'lambda_': self.lambda_,
            'trace_kind': self.trace_kind})

    def update(self, phi_t, phi_tp1, rho_t, gamma_t, r_tp1, z_tp1=0.):
        r"""

        Update the weights from a single (off-policy) transition.

        Parameters
        ----------
        phi_t : ndarray, shape: [dimension]

            The features of the current state.

        phi_tp1 : ndarray, shape: [dimension]

            The features of the next state.

        rho_t : float

            The importance weight :math:`\rho_t=\pi(a_t|s_t)/b(a_t|s_t)`.

        gamma_t : float

            The discount factor of this transition.

        r_tp1 : float

            The reward.

        z_tp1 : float, optional

            The outcome signal, which enters the target with weight :math:`1-\gamma`.

        Returns
        -------
        delta : float

            The TD-error :math:`\delta_t`.

        """
        return self._update(phi_t, phi_tp1, rho_t, gamma_t, r_tp1, z_tp1)


class GQ(_GradientTDBase):
    r"""

    GQ(:math:`\lambda`): off-policy gradient-TD learning of action values with linear function
    approximation. The bootstrap features are the expectation
    :math:`\bar\phi_{t+1}=\sum_a\pi(a|s_{t+1})\,\phi(s_{t+1},a)` under the target policy, see
    :func:`gradient_td_update` for the update rule. The importance weight only rescales the
    carried trace, :math:`e\leftarrow\phi_t+\gamma\lambda\rho_t\,e`, so a transition with
    :math:`\rho_t=0` still updates the value of the executed action.

    Parameters
    ----------
    dimension : positive int

        The dimension of the state-action feature vectors.

    alpha_v : positive float, optional

        The step size of the primary weights :math:`\theta`.

    alpha_w : positive float, optional

        The step size of the secondary weights :math:`w`.

    gamma : float between 0 and 1, optional

        The discount factor :math:`\gamma`, i.e. one minus the termination probability.

    lambda_ : float between 0 and 1, optional

        The trace decay parameter :math:`\lambda`.

    trace_kind : {'accumulating', 'replacing'}, optional

        The kind of eligibility trace, see :func:`tdcontrol.utils.update_trace`.

    """
    _action_values = True

    def __init__(self, dimension, alpha_v=0.1, alpha_w=0.01, gamma=0.99, lambda_=0.9,
                 trace_kind='accumulating'):
        super().__init__(dimension, alpha_v, alpha_w, lambda_, trace_kind)
        self.gamma = float(gamma)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({
            'alpha_v': self.alpha_v,
            'alpha_w': self.alpha_w,
            'gamma': self.gamma,
            'lambda_': self.lambda_,
            'trace_kind': self.trace_kind})

    def update(self, phi_t, phi_bar_tp1, rho_t, r_tp1, z_tp1=0.):
        r"""

        Update the weights from a single (off-policy) transition.

        Parameters
        ----------
        phi_t : ndarray, shape: [dimension]

            The features of the current state-action pair.

        phi_bar_tp1 : ndarray, shape: [dimension]

            The expectation-weighted features of the next state under the target policy.

        rho_t : float

            The importance weight :math:`\rho_t=\pi(a_t|s_t)/b(a_t|s_t)`.

        r_tp1 : float

            The reward.

        z_tp1 : float, optional

            The outcome signal, which enters the target with weight :math:`1-\gamma`.

        Returns
        -------
        delta : float

            The TD-error :math:`\delta_t`.

        """
        return self._update(phi_t, phi_bar_tp1, rho_t, self.gamma, r_tp1, z_tp1)
