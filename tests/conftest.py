"""Shared test fixtures for the summarizer tests."""

import random

import pytest

from text_summarizer.config import Settings
from text_summarizer.rewriter import TextRewriter
from text_summarizer.session import ModelSession

ANIMALS = "Cats are mammals. Dogs are mammals. Birds can fly. Fish live in water."

ARTICLE = (
    "Renewable energy is reshaping how cities plan their power grids. "
    "Solar panels are now cheaper than coal plants in many regions. "
    "Wind farms provide steady electricity during the winter months. "
    "Battery storage helps balance supply when the sun goes down. "
    "Engineers describe the grid as a network of flexible resources. "
    "Policy makers must update regulations to support these changes. "
    "Overall, renewable energy offers a cleaner path for urban growth."
)


@pytest.fixture
def animals():
    return ANIMALS


@pytest.fixture
def article():
    return ARTICLE


@pytest.fixture
def settings():
    """Settings with simulated delays switched off and a fixed seed."""
    return Settings(default_model="local", sentence_count=3, seed=7, delay_scale=0)


@pytest.fixture
def session():
    return ModelSession(delay_scale=0)


@pytest.fixture
def rewriter():
    return TextRewriter(random.Random(7))
