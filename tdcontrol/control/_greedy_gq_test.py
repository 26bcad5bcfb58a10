import os
import tempfile

import jax.numpy as jnp

from .._base.errors import BoundednessError, NotInitializedError
from .._base.test_case import TestCase
from ..policies import EpsilonGreedy, Greedy, RandomPolicy
from ..predictors import GQ
from ._greedy_gq import GQOnPolicyControl, GreedyGQ


class CountingGreedy(Greedy):
    num_updates = 0

    def update(self, phis):
        self.num_updates += 1
        super().update(phis)


class NaNGreedyGQ(GreedyGQ):
    def compute_rho(self, a_t):
        return float('nan')


class TestGreedyGQ(TestCase):

    def make_learner(self, cls=GreedyGQ, target_cls=Greedy, random_seed=13, **kwargs):
        gq = GQ(self.to_state_action.dimension, alpha_v=0.1, alpha_w=0.05, gamma=0.9, lambda_=0.5)
        target = target_cls(gq, random_seed=random_seed)
        behavior = EpsilonGreedy(gq, epsilon=0.5, random_seed=random_seed + 1)
        return cls(target, behavior, self.to_state_action, gq, **kwargs)

    def test_step_before_initialize(self):
        learner = self.make_learner()
        with self.assertRaises(NotInitializedError):
            learner.step(0, 1, 1, 0.)

    def test_rho(self):
        learner = self.make_learner()
        learner.initialize(0)
        a = int(jnp.argmax(learner.target.probabilities()))
        expected = learner.target.pi(a) / learner.behavior.pi(a)
        learner.step(0, a, 1, 0.)
        self.assertAlmostEqual(learner.rho_t, expected)
        self.assertGreater(learner.rho_t, 1.)

    def test_rho_out_of_bound(self):
        learner = self.make_learner(bound=1.0)
        learner.initialize(0)
        a = int(jnp.argmax(learner.target.probabilities()))
        with self.assertRaises(BoundednessError):
            learner.step(0, a, 1, 0.)

    def test_rho_non_finite(self):
        learner = self.make_learner(cls=NaNGreedyGQ)
        learner.initialize(0)
        with self.assertRaises(BoundednessError):
            learner.step(0, 0, 1, 0.)

    def test_delta_out_of_bound(self):
        learner = self.make_learner()
        a0 = learner.initialize(0)
        with self.assertRaisesRegex(BoundednessError, "delta_t"):
            learner.step(0, a0, 1, 1e9)

    def test_target_updated_twice_per_step(self):
        learner = self.make_learner(target_cls=CountingGreedy)
        a0 = learner.initialize(0)
        self.assertEqual(learner.target.num_updates, 1)
        learner.step(0, a0, 1, 0.)
        self.assertEqual(learner.target.num_updates, 3)

    def test_bootstrap_features_from_target(self):
        gq = GQ(self.to_state_action.dimension, alpha_v=1.0, alpha_w=0.5, gamma=0.9, lambda_=0.5)
        # index = 5 * action + state
        theta = jnp.zeros(10).at[5].set(0.5).at[1].set(1.).at[6].set(2.)
        w = jnp.zeros(10).at[0].set(0.4).at[5].set(0.4)
        gq.params = {'theta': theta, 'w': w}
        learner = GreedyGQ(
            Greedy(gq, random_seed=1), EpsilonGreedy(gq, epsilon=0.5, random_seed=2),
            self.to_state_action, gq)

        a0 = learner.initialize(0)
        learner.step(0, a0, 1, 1.)

        # greedy target at state 1 picks action 1, so phi_bar = phi(1, 1)
        i, phi_t, phi_bar = 5 * a0, jnp.eye(10)[5 * a0], jnp.eye(10)[6]
        delta = 1. + 0.9 * 2. - float(theta[i])
        self.assertAlmostEqual(learner.delta_t, delta, decimal=5)
        self.assertArrayAlmostEqual(
            gq.params['theta'], theta + delta * phi_t - 0.9 * 0.5 * 0.4 * phi_bar, decimal=5)
        self.assertArrayAlmostEqual(
            gq.params['w'], w + 0.5 * (delta - 0.4) * phi_t, decimal=5)

    def test_propose_action_uses_target(self):
        gq = GQ(self.to_state_action.dimension)
        gq.params = {'theta': jnp.zeros(10).at[5].set(1.), 'w': jnp.zeros(10)}
        learner = GreedyGQ(
            Greedy(gq, random_seed=1), RandomPolicy(random_seed=2), self.to_state_action, gq)
        self.assertEqual({learner.propose_action(0) for _ in range(20)}, {1})

    def test_compute_value_function(self):
        learner = self.make_learner()
        self.run_steps(learner, 100)
        for x in range(self.env.observation_space.n):
            v = learner.compute_value_function(x)
            phis = self.to_state_action(x)
            probs = learner.target.compute_probabilities(phis)
            q = learner.gq.predict(phis.features)
            self.assertAlmostEqual(v, float(jnp.sum(probs * q)), decimal=5)

    def test_evaluation_between_steps_keeps_rho(self):
        learner = self.make_learner()
        self.run_steps(learner, 20)
        rhos = [learner.compute_rho(a) for a in self.to_state_action.actions]
        probs = learner.target.probabilities()
        for x in range(self.env.observation_space.n):
            learner.propose_action(x)
            learner.compute_value_function(x)
        self.assertArrayAlmostEqual(learner.target.probabilities(), probs)
        self.assertEqual([learner.compute_rho(a) for a in self.to_state_action.actions], rhos)

    def test_reset_then_initialize(self):
        fresh = self.make_learner()
        used = self.make_learner()
        self.run_steps(used, 50)
        used.reset()
        used.target.random_seed = fresh.target.random_seed
        used.behavior.random_seed = fresh.behavior.random_seed

        self.assertEqual(self.run_steps(fresh, 50), self.run_steps(used, 50))
        self.assertPytreeAlmostEqual(fresh.gq.params, used.gq.params)
        for x in range(self.env.observation_space.n):
            self.assertEqual(fresh.propose_action(x), used.propose_action(x))
            self.assertAlmostEqual(
                fresh.compute_value_function(x), used.compute_value_function(x))

    def test_persist_resurrect(self):
        learner1 = self.make_learner()
        learner2 = self.make_learner()
        self.run_steps(learner1, 100)
        with tempfile.TemporaryDirectory() as d:
            filepath = os.path.join(d, 'greedy_gq')
            learner1.persist(filepath)
            learner2.resurrect(filepath)

        self.assertPytreeAlmostEqual(learner1.gq.params, learner2.gq.params)
        learner1.target.random_seed = learner2.target.random_seed = 7
        for x in range(self.env.observation_space.n):
            self.assertEqual(learner1.propose_action(x), learner2.propose_action(x))
            self.assertAlmostEqual(
                learner1.compute_value_function(x), learner2.compute_value_function(x))


class TestGQOnPolicyControl(TestCase):

    def make_learner(self):
        gq = GQ(self.to_state_action.dimension, alpha_v=0.1, alpha_w=0.05, gamma=0.9)
        acting = EpsilonGreedy(gq, epsilon=0.2, random_seed=13)
        return GQOnPolicyControl(acting, self.to_state_action, gq)

    def test_rho_is_one(self):
        learner = self.make_learner()
        self.assertIs(learner.target, learner.behavior)
        learner.initialize(0)
        for a in self.to_state_action.actions:
            self.assertEqual(learner.compute_rho(a), 1.0)
        self.run_steps(learner, 30)
        self.assertEqual(learner.rho_t, 1.0)

    def test_learns(self):
        learner = self.make_learner()
        self.run_steps(learner, 100)
        self.assertPytreeNotEqual(
            learner.gq.params['theta'], jnp.zeros(self.to_state_action.dimension))
