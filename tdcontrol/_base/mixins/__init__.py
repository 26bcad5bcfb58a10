from ._logger import LoggerMixin
from ._random_state import RandomStateMixin
from ._persistence import PersistenceMixin


__all__ = (
    'LoggerMixin',
    'RandomStateMixin',
    'PersistenceMixin',
)
