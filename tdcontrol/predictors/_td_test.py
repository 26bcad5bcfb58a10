import os
import tempfile

import jax.numpy as jnp

from .._base.errors import DimensionError, NotInitializedError
from .._base.test_case import TestCase
from ._td import TD, TDLambda, Sarsa


class TestTD(TestCase):

    def test_update(self):
        td = TD(3, alpha=0.5, gamma=0.9)
        td.initialize()
        td.params = {'theta': jnp.array([1., 2., 0.])}
        delta = td.update(jnp.array([1., 0., 0.]), jnp.array([0., 1., 0.]), 1.)
        # delta = 1 + 0.9 * 2 - 1
        self.assertAlmostEqual(delta, 1.8, decimal=5)
        self.assertArrayAlmostEqual(td.params['theta'], [1.9, 2., 0.], decimal=5)

    def test_update_before_initialize(self):
        td = TD(3)
        with self.assertRaises(NotInitializedError):
            td.update(jnp.ones(3), jnp.ones(3), 0.)

    def test_wrong_dimension(self):
        td = TD(3)
        td.initialize()
        with self.assertRaises(DimensionError):
            td.update(jnp.ones(4), jnp.ones(3), 0.)
        with self.assertRaises(DimensionError):
            td.params = {'theta': jnp.ones(4)}

    def test_reset(self):
        td = TD(3)
        td.initialize()
        td.update(jnp.array([1., 0., 0.]), jnp.zeros(3), 1.)
        self.assertPytreeNotEqual(td.params, {'theta': jnp.zeros(3)})
        td.reset()
        self.assertFalse(td.initialized)
        self.assertPytreeAlmostEqual(td.params, {'theta': jnp.zeros(3)})

    def test_predict(self):
        td = TD(2)
        td.params = {'theta': jnp.array([1., -1.])}
        self.assertAlmostEqual(float(td.predict(jnp.array([3., 1.]))), 2.)
        self.assertArrayAlmostEqual(td.predict(jnp.eye(2)), [1., -1.])


class TestTDLambda(TestCase):

    def test_trace(self):
        td = TDLambda(2, alpha=1.0, gamma=0.5, lambda_=0.5)
        td.initialize()
        phi_a, phi_b = jnp.array([1., 0.]), jnp.array([0., 1.])
        td.update(phi_a, phi_b, 0.)   # delta = 0, e = phi_a
        self.assertArrayAlmostEqual(td.traces['theta'], [1., 0.])
        delta = td.update(phi_b, phi_a, 1.)  # delta = 1, e = 0.25 * phi_a + phi_b
        self.assertAlmostEqual(delta, 1.)
        self.assertArrayAlmostEqual(td.traces['theta'], [0.25, 1.])
        self.assertArrayAlmostEqual(td.params['theta'], [0.25, 1.])

    def test_initialize_clears_traces(self):
        td = TDLambda(2)
        td.initialize()
        td.update(jnp.array([1., 0.]), jnp.array([0., 1.]), 1.)
        td.initialize()
        self.assertArrayAlmostEqual(td.traces['theta'], jnp.zeros(2))
        self.assertPytreeNotEqual(td.params, {'theta': jnp.zeros(2)})

    def test_invalid_trace_kind(self):
        with self.assertRaises(ValueError):
            TDLambda(2, trace_kind='dutch')

    def test_persist_resurrect(self):
        sarsa1 = Sarsa(2, alpha=0.5)
        sarsa1.initialize()
        sarsa1.update(jnp.array([1., 0.]), jnp.array([0., 1.]), 1.)
        sarsa2 = Sarsa(2, alpha=0.5)
        with tempfile.TemporaryDirectory() as d:
            filepath = os.path.join(d, 'sarsa.pkl.lz4')
            sarsa1.persist(filepath)
            sarsa2.resurrect(filepath)
        self.assertPytreeAlmostEqual(sarsa1.params, sarsa2.params)

    def test_hyperparams(self):
        td = TDLambda(2, alpha=0.2, gamma=0.8, lambda_=0.7, trace_kind='replacing')
        self.assertEqual(dict(td.hyperparams), {
            'alpha': 0.2, 'gamma': 0.8, 'lambda_': 0.7, 'trace_kind': 'replacing'})
        self.assertIn("'trace_kind': 'replacing'", repr(td))
