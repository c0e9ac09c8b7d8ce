"""
Squirrel: on-disk memoization cache
Squirrels climb trees and feed on nuts and seeds. They also love to do caching.
"""

from .codec import JsonCodec, PickleCodec, get_codec
from .config import SquirrelConfig, load_config
from .errors import ConfigurationError, PersistenceError, SquirrelError
from .locator import ItemLocator
from .squirrel import Squirrel
from .storage import FileStorage

__all__ = [
    'Squirrel',
    'ItemLocator',
    'FileStorage',
    'PickleCodec',
    'JsonCodec',
    'get_codec',
    'SquirrelConfig',
    'load_config',
    'SquirrelError',
    'ConfigurationError',
    'PersistenceError',
]
