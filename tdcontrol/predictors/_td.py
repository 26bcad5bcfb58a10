import jax
import jax.numpy as jnp
import haiku as hk
import optax

from ..utils import TRACE_KINDS, check_features, update_trace
from ._base import BasePredictor


__all__ = (
    'TD',
    'TDLambda',
    'Sarsa',
)


class TD(BasePredictor):
    r"""

    On-policy TD(0) with linear function approximation.

    .. math::

        \delta_t\ &=\ r_{t+1} + \gamma\,\theta^\top\phi_{t+1} - \theta^\top\phi_t \\
        \theta\ &\leftarrow\ \theta + \alpha\,\delta_t\,\phi_t

    Parameters
    ----------
    dimension : positive int

        The dimension of the feature vectors.

    alpha : positive float, optional

        The step size :math:`\alpha`.

    gamma : float between 0 and 1, optional

        The discount factor :math:`\gamma`.

    """
    def __init__(self, dimension, alpha=0.1, gamma=0.99):
        super().__init__(dimension)
        self.alpha = float(alpha)
        self.gamma = float(gamma)

        def update_func(params, phi_t, phi_tp1, r_tp1, alpha, gamma):
            theta = params['theta']
            delta = r_tp1 + gamma * jnp.dot(theta, phi_tp1) - jnp.dot(theta, phi_t)
            return optax.apply_updates(params, {'theta': alpha * delta * phi_t}), delta

        self._update_func = jax.jit(update_func)

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({'alpha': self.alpha, 'gamma': self.gamma})

    def update(self, phi_t, phi_tp1, r_tp1):
        r"""

        Update the weights from a single transition.

        Parameters
        ----------
        phi_t : ndarray, shape: [dimension]

            The features of the current state.

        phi_tp1 : ndarray, shape: [dimension]

            The features of the next state.

        r_tp1 : float

            The reward.

        Returns
        -------
        delta : float

            The TD-error :math:`\delta_t`.

        """
        self._check_initialized()
        phi_t = check_features(phi_t, self.dimension, 'phi_t')
        phi_tp1 = check_features(phi_tp1, self.dimension, 'phi_tp1')
        self._params, delta = self._update_func(
            self._params, phi_t, phi_tp1, r_tp1, self.alpha, self.gamma)
        return float(delta)


class TDLambda(BasePredictor):
    r"""

    On-policy TD(:math:`\lambda`) with linear function approximation.

    .. math::

        \delta_t\ &=\ r_{t+1} + \gamma\,\theta^\top\phi_{t+1} - \theta^\top\phi_t \\
        e\ &\leftarrow\ \gamma\lambda\,e + \phi_t \\
        \theta\ &\leftarrow\ \theta + \alpha\,\delta_t\,e

    Parameters
    ----------
    dimension : positive int

        The dimension of the feature vectors.

    alpha : positive float, optional

        The step size :math:`\alpha`.

    gamma : float between 0 and 1, optional

        The discount factor :math:`\gamma`.

    lambda_ : float between 0 and 1, optional

        The trace decay parameter :math:`\lambda`.

    trace_kind : {'accumulating', 'replacing'}, optional

        The kind of eligibility trace, see :func:`tdcontrol.utils.update_trace`.

    """
    def __init__(self, dimension, alpha=0.1, gamma=0.99, lambda_=0.9, trace_kind='accumulating'):
        super().__init__(dimension)
        self.alpha = float(alpha)
        self.gamma = float(gamma)
        self.lambda_ = float(lambda_)
        self.trace_kind = trace_kind
        if trace_kind not in TRACE_KINDS:
            raise ValueError(f"trace_kind must be one of {TRACE_KINDS}, got: {trace_kind!r}")

        def update_func(params, e, phi_t, phi_tp1, r_tp1, alpha, gamma, lambda_):
            theta = params['theta']
            delta = r_tp1 + gamma * jnp.dot(theta, phi_tp1) - jnp.dot(theta, phi_t)
            e = update_trace(e, gamma * lambda_, {'theta': phi_t}, kind=self.trace_kind)
            updates = jax.tree_util.tree_map(lambda e_i: alpha * delta * e_i, e)
            return optax.apply_updates(params, updates), e, delta

        self._update_func = jax.jit(update_func)

    def default_traces(self):
        return {'theta': jnp.zeros(self.dimension)}

    @property
    def hyperparams(self):
        return hk.data_structures.to_immutable_dict({
            'alpha': self.alpha,
            'gamma': self.gamma,
            'lambda_': self.lambda_,
            'trace_kind': self.trace_kind})

    def update(self, phi_t, phi_tp1, r_tp1):
        r"""

        Update the weights from a single transition.

        Parameters
        ----------
        phi_t : ndarray, shape: [dimension]

            The features of the current state (or state-action pair).

        phi_tp1 : ndarray, shape: [dimension]

            The features of the next state (or state-action pair).

        r_tp1 : float

            The reward.

        Returns
        -------
        delta : float

            The TD-error :math:`\delta_t`.

        """
        self._check_initialized()
        phi_t = check_features(phi_t, self.dimension, 'phi_t')
        phi_tp1 = check_features(phi_tp1, self.dimension, 'phi_tp1')
        self._params, self._traces, delta = self._update_func(
            self._params, self._traces, phi_t, phi_tp1, r_tp1,
            self.alpha, self.gamma, self.lambda_)
        return float(delta)


class Sarsa(TDLambda):
    r"""

    Sarsa(:math:`\lambda`), i.e. TD(:math:`\lambda`) on state-action features
    :math:`\phi_t=\phi(s_t,a_t)`:

    .. math::

        \delta_t\ &=\ r_{t+1} + \gamma\,\theta^\top\phi_{t+1} - \theta^\top\phi_t \\
        e\ &\leftarrow\ \gamma\lambda\,e + \phi_t \\
        \theta\ &\leftarrow\ \theta + \alpha\,\delta_t\,e

    The bootstrap features :math:`\phi_{t+1}` are either those of the sampled next action
    (:class:`tdcontrol.control.SarsaControl`) or the expectation-weighted features over all next
    actions (:class:`tdcontrol.control.ExpectedSarsaControl`).

    Parameters
    ----------
    dimension : positive int

        The dimension of the state-action feature vectors.

    alpha : positive float, optional

        The step size :math:`\alpha`.

    gamma : float between 0 and 1, optional

        The discount factor :math:`\gamma`.

    lambda_ : float between 0 and 1, optional

        The trace decay parameter :math:`\lambda`.

    trace_kind : {'accumulating', 'replacing'}, optional

        The kind of eligibility trace, see :func:`tdcontrol.utils.update_trace`.

    """
    pass
