__version__ = '0.1.0'

# expose specific classes and functions
from .control import (
    SarsaControl,
    ExpectedSarsaControl,
    GreedyGQ,
    GQOnPolicyControl,
    OffPAC,
    ActorCritic,
    AverageRewardActorCritic,
)
from .utils import enable_logging

# pre-load submodules
from . import actors
from . import control
from . import policies
from . import predictors
from . import representations
from . import utils


__all__ = (

    # classes and functions
    'SarsaControl',
    'ExpectedSarsaControl',
    'GreedyGQ',
    'GQOnPolicyControl',
    'OffPAC',
    'ActorCritic',
    'AverageRewardActorCritic',
    'enable_logging',

    # modules
    'actors',
    'control',
    'policies',
    'predictors',
    'representations',
    'utils',
)
