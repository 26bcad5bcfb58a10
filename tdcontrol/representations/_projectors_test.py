import gymnasium
import jax.numpy as jnp
import numpy as onp

from .._base.test_case import TestCase
from ._base import StateActionFeatures
from ._projectors import ActionStackedProjector, IdentityProjector, OneHotProjector


class TestOneHotProjector(TestCase):

    def test_project(self):
        projector = OneHotProjector(gymnasium.spaces.Discrete(4))
        self.assertEqual(projector.dimension, 4)
        self.assertArrayAlmostEqual(projector(2), [0., 0., 1., 0.])

    def test_bias(self):
        projector = OneHotProjector(gymnasium.spaces.Discrete(3), bias=True)
        self.assertEqual(projector.dimension, 4)
        self.assertArrayAlmostEqual(projector(0), [1., 0., 0., 1.])

    def test_out_of_range(self):
        projector = OneHotProjector(gymnasium.spaces.Discrete(3))
        with self.assertRaises(ValueError):
            projector(3)

    def test_wrong_space(self):
        with self.assertRaises(TypeError):
            OneHotProjector(gymnasium.spaces.Box(low=0., high=1., shape=(2,)))


class TestIdentityProjector(TestCase):

    def test_project(self):
        space = gymnasium.spaces.Box(low=-1., high=1., shape=(2, 2))
        projector = IdentityProjector(space, bias=True)
        self.assertEqual(projector.dimension, 5)
        phi = projector(onp.array([[0.1, 0.2], [0.3, 0.4]]))
        self.assertArrayAlmostEqual(phi, [0.1, 0.2, 0.3, 0.4, 1.])

    def test_wrong_shape(self):
        projector = IdentityProjector(gymnasium.spaces.Box(low=-1., high=1., shape=(3,)))
        with self.assertRaises(ValueError):
            projector(onp.zeros(4))


class TestActionStackedProjector(TestCase):

    def test_state_actions(self):
        to_state_action = self.to_state_action
        self.assertEqual(to_state_action.actions, (0, 1))
        self.assertEqual(to_state_action.dimension, 10)

        phis = to_state_action.state_actions(3)
        self.assertIsInstance(phis, StateActionFeatures)
        self.assertEqual(phis.dimension, 10)
        self.assertEqual(list(phis), [0, 1])
        self.assertArrayAlmostEqual(phis.at(0), jnp.zeros(10).at[3].set(1.))
        self.assertArrayAlmostEqual(phis.at(1), jnp.zeros(10).at[8].set(1.))

    def test_unknown_action(self):
        phis = self.to_state_action(0)
        with self.assertRaises(ValueError):
            phis.at(2)

    def test_wrong_action_space(self):
        with self.assertRaises(TypeError):
            ActionStackedProjector(
                self.projector, gymnasium.spaces.Box(low=0., high=1., shape=(1,)))
