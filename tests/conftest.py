"""
Shared test fixtures.
"""

import logging

import numpy as np
import pytest

from textwalk.config import TextWalkConfig
from textwalk.geometry import Reducer


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs so later tests don't write to closed streams."""
    yield
    package_logger = logging.getLogger("textwalk")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def small_config() -> TextWalkConfig:
    return TextWalkConfig.for_testing(input_dimensions=12)


@pytest.fixture
def small_reducer(small_config) -> Reducer:
    return Reducer(small_config)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(7)
