import jax
import jax.numpy as jnp

from ...utils import dump, load


class PersistenceMixin:
    r"""

    Adds :func:`persist` and :func:`resurrect` to objects that expose their learned state through a
    ``params`` property (a pytree with ndarray leaves). Subclasses may override
    :func:`_get_persistent_state` and :func:`_set_persistent_state` to store more than ``params``.

    """
    def persist(self, filepath):
        r"""

        Store the learned parameters to a file.

        Parameters
        ----------
        filepath : str

            The filepath to store the parameters. Eligibility traces are not stored.

        """
        dump(jax.device_get(self._get_persistent_state()), filepath)
        self.logger.debug(f"persisted parameters to: {filepath}")

    def resurrect(self, filepath):
        r"""

        Restore the learned parameters from a file that was created by :func:`persist`.

        Parameters
        ----------
        filepath : str

            The filepath of the stored parameters.

        """
        state = load(filepath)
        self._set_persistent_state(jax.tree_util.tree_map(jnp.asarray, state))
        self.logger.debug(f"resurrected parameters from: {filepath}")

    def _get_persistent_state(self):
        return self.params

    def _set_persistent_state(self, state):
        self.params = state
