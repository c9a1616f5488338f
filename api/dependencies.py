"""
FastAPI Dependencies

Shared dependencies for dependency injection.
"""

from typing import Callable, Optional

from census.pipeline import CensusGenerator
from .config import Settings, get_settings

GeneratorFactory = Callable[[Optional[int]], CensusGenerator]


def _new_generator(seed: Optional[int] = None) -> CensusGenerator:
    return CensusGenerator(seed=seed)


def get_generator_factory() -> GeneratorFactory:
    """
    Get the factory that creates one CensusGenerator per request.
    
    Each request is its own batch, so it gets a fresh random source
    and a fresh employee-ID set.
    """
    return _new_generator


__all__ = ['Settings', 'get_settings', 'get_generator_factory', 'GeneratorFactory']
