import jax
import jax.numpy as jnp
import numpy as onp

from .._base.errors import DimensionError
from .._base.test_case import TestCase
from ._array import argmax, check_features, zeros_like_tree


class TestArrayUtils(TestCase):

    def test_argmax_consistent(self):
        rngs = jax.random.split(jax.random.PRNGKey(13), 4)
        vec = jax.random.normal(rngs[0], shape=(5,))
        mat = jax.random.normal(rngs[1], shape=(3, 5))

        self.assertEqual(argmax(rngs[2], vec), jnp.argmax(vec, axis=-1))
        self.assertArrayAlmostEqual(argmax(rngs[3], mat), jnp.argmax(mat, axis=-1))

    def test_argmax_random_tie_break(self):
        vec = jnp.array([1., 3., 0., 3.])
        rng = jax.random.PRNGKey(self.seed)
        picks = set()
        for _ in range(50):
            rng, key = jax.random.split(rng)
            picks.add(int(argmax(key, vec)))
        self.assertEqual(picks, {1, 3})

    def test_check_features(self):
        phi = check_features(onp.ones(3), 3)
        self.assertIsInstance(phi, jnp.ndarray)
        self.assertArrayShape(check_features(jnp.ones((2, 3)), 3), (2, 3))

    def test_check_features_errors(self):
        with self.assertRaises(TypeError):
            check_features([1., 2., 3.], 3)
        with self.assertRaises(DimensionError):
            check_features(jnp.ones(4), 3)
        with self.assertRaises(DimensionError):
            check_features(jnp.ones((2, 2, 3)), 3)

    def test_zeros_like_tree(self):
        tree = {'u': jnp.ones(3), 'w': jnp.ones((2, 2))}
        zeros = zeros_like_tree(tree)
        self.assertPytreeAlmostEqual(zeros, {'u': jnp.zeros(3), 'w': jnp.zeros((2, 2))})
