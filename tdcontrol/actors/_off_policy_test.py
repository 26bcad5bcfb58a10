import os
import tempfile

import jax.numpy as jnp

from .._base.errors import NotInitializedError
from .._base.test_case import FixedGradientDistribution, TestCase
from ..policies import BoltzmannDistribution
from ._off_policy import ActorLambdaOffPolicy


class TestActorLambdaOffPolicy(TestCase):

    def setUp(self):
        self.phis = self.to_state_action.state_actions(0)

    def test_decay_then_rescale(self):
        g1, g2 = [1., 0.], [0., 1.]
        actor = ActorLambdaOffPolicy(
            alpha_u=1.0, lambda_=1.0, policy_distribution=FixedGradientDistribution([g1, g2]))
        actor.initialize()
        actor.update(self.phis, 0, rho_t=1.0, gamma_t=0.9, delta_t=1.0)
        self.assertArrayAlmostEqual(actor.traces['u'], [1., 0.])
        self.assertArrayAlmostEqual(actor.params['u'], [1., 0.])

        actor.update(self.phis, 1, rho_t=0.5, gamma_t=0.9, delta_t=1.0)
        # e2 = 0.5 * (0.9 * e1 + g2), rescaling the whole trace
        self.assertArrayAlmostEqual(actor.traces['u'], [0.45, 0.5])
        self.assertArrayAlmostEqual(actor.params['u'], [1.45, 0.5])

    def test_update_before_initialize(self):
        actor = ActorLambdaOffPolicy(0.1, 0.5, FixedGradientDistribution([[1., 0.]]))
        with self.assertRaises(NotInitializedError):
            actor.update(self.phis, 0, 1., 0.9, 1.)

    def test_reset(self):
        actor = ActorLambdaOffPolicy(1.0, 0.5, FixedGradientDistribution([[1., 0.]]))
        actor.initialize()
        actor.update(self.phis, 0, 1., 0.9, 1.)
        actor.reset()
        self.assertFalse(actor.initialized)
        self.assertPytreeAlmostEqual(actor.params, {'u': jnp.zeros(2)})
        self.assertPytreeAlmostEqual(actor.traces, {'u': jnp.zeros(2)})
        with self.assertRaises(NotInitializedError):
            actor.update(self.phis, 0, 1., 0.9, 1.)

    def test_initialize_keeps_params(self):
        actor = ActorLambdaOffPolicy(1.0, 0.5, FixedGradientDistribution([[1., 0.]]))
        actor.initialize()
        actor.update(self.phis, 0, 1., 0.9, 1.)
        actor.initialize()
        self.assertPytreeAlmostEqual(actor.traces, {'u': jnp.zeros(2)})
        self.assertArrayAlmostEqual(actor.params['u'], [1., 0.])

    def test_boltzmann_update_and_propose_action(self):
        pd = BoltzmannDistribution(self.to_state_action.dimension, random_seed=self.seed)
        actor = ActorLambdaOffPolicy(alpha_u=1.0, lambda_=0.0, policy_distribution=pd)
        actor.initialize()
        actor.update(self.phis, 1, rho_t=1.0, gamma_t=0.9, delta_t=1.0)
        self.assertEqual(actor.propose_action(self.phis), 1)
        self.assertGreater(actor.pi(1), 0.5)

    def test_persist_resurrect(self):
        pd1 = BoltzmannDistribution(self.to_state_action.dimension)
        pd2 = BoltzmannDistribution(self.to_state_action.dimension)
        actor1 = ActorLambdaOffPolicy(1.0, 0.5, pd1)
        actor2 = ActorLambdaOffPolicy(1.0, 0.5, pd2)
        actor1.initialize()
        actor1.update(self.phis, 1, 1.0, 0.9, 1.0)
        with tempfile.TemporaryDirectory() as d:
            filepath = os.path.join(d, 'actor.pkl.lz4')
            actor1.persist(filepath)
            actor2.resurrect(filepath)
        self.assertPytreeAlmostEqual(pd1.params, pd2.params)
        self.assertPytreeAlmostEqual(actor2.traces, {'u': jnp.zeros(10)})

    def test_invalid_policy_distribution(self):
        with self.assertRaises(TypeError):
            ActorLambdaOffPolicy(1.0, 0.5, object())
