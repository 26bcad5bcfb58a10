import numpy as onp
import jax


class RandomStateMixin:
    @property
    def random_seed(self):
        r"""

        The seed of the internal pseudo-random number generator. Assigning a new seed (re)starts
        the stream of keys returned by :attr:`rng`; assigning ``None`` picks a seed at random.

        """
        return self._random_seed

    @random_seed.setter
    def random_seed(self, new_random_seed):
        if new_random_seed is None:
            new_random_seed = onp.random.randint(2147483647)
        self._random_seed = int(new_random_seed)
        self._random_key = jax.random.PRNGKey(self._random_seed)

    @property
    def rng(self):
        self._random_key, key = jax.random.split(self._random_key)
        return key
