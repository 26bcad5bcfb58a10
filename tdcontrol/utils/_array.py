import jax
import jax.numpy as jnp
import numpy as onp
import chex

from .._base.errors import DimensionError


__all__ = (
    'argmax',
    'check_features',
    'zeros_like_tree',
)


def argmax(rng, arr, axis=-1):
    r"""

    This is a little hack to ensure that argmax breaks ties randomly, which is something that
    :func:`numpy.argmax` doesn't do.

    Parameters
    ----------
    rng : jax.random.PRNGKey

        A pseudo-random number generator key.

    arr : array_like

        Input array.

    axis : int, optional

        By default, the index is into the flattened array, otherwise along the specified axis.

    Returns
    -------
    index_array : ndarray of ints

        Array of indices into the array. It has the same shape as `a.shape` with the dimension
        along `axis` removed.

    """
    if not isinstance(arr, jnp.ndarray):
        arr = jnp.asarray(arr)
    candidates = arr == jnp.max(arr, axis=axis, keepdims=True)
    logits = (2 * candidates - 1) * 50.  # log(max_float32) == 88.72284
    logits = jnp.moveaxis(logits, axis, -1)
    return jax.random.categorical(rng, logits)


def check_features(phi, dimension, name='phi'):
    r"""

    Check that a feature vector (or a stack of feature vectors) lives in a space of the given
    dimension.

    Parameters
    ----------
    phi : ndarray

        A feature vector of shape ``[dimension]`` or a matrix of shape ``[n, dimension]``.

    dimension : int

        The expected size of the last axis.

    name : str, optional

        The name of the variable, used in the error message.

    Returns
    -------
    phi : jnp.ndarray

        The same features as a jax array.

    Raises
    ------
    DimensionError

        If the size of the last axis differs from ``dimension``.

    """
    if not isinstance(phi, (onp.ndarray, jnp.ndarray)):
        raise TypeError(f"expected {name} to be an ndarray, got type: {type(phi)}")
    if phi.ndim not in (1, 2) or phi.shape[-1] != dimension:
        raise DimensionError(
            f"expected {name} with last axis of size {dimension}, got shape: {phi.shape}")
    return jnp.asarray(phi)


def zeros_like_tree(pytree):
    r"""

    Create a pytree of zeros with the same structure, shapes and dtypes as the input.

    Parameters
    ----------
    pytree : pytree with ndarray leaves

        A pytree, e.g. a dict of weight groups.

    Returns
    -------
    zeros : pytree with ndarray leaves

        The pytree of zeros.

    """
    zeros = jax.tree_util.tree_map(jnp.zeros_like, pytree)
    chex.assert_trees_all_equal_shapes(zeros, pytree)
    return zeros
