import logging

import jax
import jax.numpy as jnp
import numpy as onp
import chex

from .._base.errors import BoundednessError


__all__ = (
    'DEFAULT_BOUND',
    'TRACE_KINDS',
    'check_bounded',
    'expected_features',
    'expected_value',
    'importance_weight',
    'update_trace',
)


DEFAULT_BOUND = 1e8
TRACE_KINDS = ('accumulating', 'replacing')


def update_trace(e, decay, increment, rho=1., kind='accumulating'):
    r"""

    Update an eligibility trace. For the default ``kind='accumulating'`` this is:

    .. math::

        e\ \leftarrow\ \rho\,\left(\gamma\lambda\,e + \nabla\right)

    where :math:`\gamma\lambda` is the ``decay`` and :math:`\nabla` is the ``increment``. For
    ``kind='replacing'`` the entries where the increment is non-zero are replaced instead of
    accumulated:

    .. math::

        e_i\ \leftarrow\ \rho\,\left\{\begin{matrix}
            \nabla_i & \text{if } \nabla_i\neq 0 \\
            \gamma\lambda\,e_i & \text{otherwise}
        \end{matrix}\right.

    The accumulated trace is decayed first; the importance weight :math:`\rho` then rescales the
    entire trace, not just the new increment.

    Parameters
    ----------
    e : pytree with ndarray leaves

        The current trace, one leaf per parameter group.

    decay : float

        The trace decay rate :math:`\gamma\lambda`.

    increment : pytree with ndarray leaves

        The new increment, e.g. a feature vector or a gradient of :math:`\log\pi`. Must have the
        same structure and shapes as ``e``.

    rho : float, optional

        The importance weight :math:`\rho`.

    kind : {'accumulating', 'replacing'}, optional

        The kind of trace.

    Returns
    -------
    e_new : pytree with ndarray leaves

        The updated trace.

    """
    chex.assert_trees_all_equal_shapes(e, increment)
    if kind == 'accumulating':
        def f(e_i, g_i):
            return rho * (decay * e_i + g_i)
    elif kind == 'replacing':
        def f(e_i, g_i):
            return rho * jnp.where(g_i != 0, g_i, decay * e_i)
    else:
        raise ValueError(f"trace kind must be one of {TRACE_KINDS}, got: {kind!r}")
    return jax.tree_util.tree_map(f, e, increment)


def expected_features(probabilities, features):
    r"""

    Construct the expectation-weighted feature vector:

    .. math::

        \bar{\phi}\ =\ \sum_{a:\,\pi(a)>0} \pi(a)\,\phi(s, a)

    Actions with zero probability are skipped entirely, i.e. their feature vectors never enter the
    sum (not even multiplied by zero).

    Parameters
    ----------
    probabilities : ndarray, shape: [num_actions]

        The action probabilities :math:`\pi(a)`.

    features : ndarray, shape: [num_actions, dimension]

        The state-action feature vectors :math:`\phi(s,a)`, one row per action.

    Returns
    -------
    phi_bar : jnp.ndarray, shape: [dimension]

        The expectation-weighted feature vector.

    """
    p = jnp.asarray(probabilities)
    X = jnp.asarray(features)
    chex.assert_rank([p, X], [1, 2])
    chex.assert_axis_dimension(X, 0, p.shape[0])
    nonzero = p > 0
    return jnp.einsum('a,ad->d', jnp.where(nonzero, p, 0.), jnp.where(nonzero[:, None], X, 0.))


def expected_value(probabilities, values):
    r"""

    Compute the state value from action values, :math:`v(s)=\sum_a\pi(a|s)\,q(s,a)`.

    Parameters
    ----------
    probabilities : ndarray, shape: [num_actions]

        The action probabilities :math:`\pi(a|s)`.

    values : ndarray, shape: [num_actions]

        The action values :math:`q(s,a)`.

    Returns
    -------
    v : float

        The state value.

    """
    p = jnp.asarray(probabilities)
    q = jnp.asarray(values)
    chex.assert_equal_shape([p, q])
    return float(jnp.sum(jnp.where(p > 0, p * q, 0.)))


def check_bounded(value, bound=DEFAULT_BOUND, name='value'):
    r"""

    Check that a scalar is finite and bounded in absolute value. Off-policy TD methods with linear
    function approximation can diverge; this check stops learning before a corrupted value is
    written into the weights.

    Parameters
    ----------
    value : scalar

        The value to check, e.g. an importance weight :math:`\rho` or a TD-error :math:`\delta`.

    bound : positive float, optional

        The largest allowed absolute value.

    name : str, optional

        The name of the value, used in the error message.

    Returns
    -------
    value : float

        The unchanged value as a python float.

    Raises
    ------
    BoundednessError

        If the value is non-finite or exceeds the bound.

    """
    value = float(value)
    if not onp.isfinite(value) or abs(value) > bound:
        msg = f"{name} must be finite and bounded by {bound:g} in absolute value, got: {value}"
        logging.getLogger('tdcontrol.utils.check_bounded').error(msg)
        raise BoundednessError(msg)
    return value


def importance_weight(pi_target, pi_behavior):
    r"""

    Compute the importance weight :math:`\rho=\pi(a|s)/b(a|s)`.

    Parameters
    ----------
    pi_target : float

        The probability :math:`\pi(a|s)` under the target policy.

    pi_behavior : float

        The probability :math:`b(a|s)` under the behavior policy.

    Returns
    -------
    rho : float

        The importance weight. This is ``inf`` if the behavior policy assigns zero probability to
        the action, which :func:`check_bounded` rejects.

    """
    if pi_behavior == 0:
        return float('inf')
    return float(pi_target) / float(pi_behavior)
