"""Shared pytest fixtures for goldfish tests."""

import random

import pytest

from helpers import FOXY_SHADOWSTEP_HAND, make_state


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def foxy_lethal_state():
    """Four mana into 30 life with the Foxy/Shadowstep package."""
    return make_state(mana=4, life=30, hand=FOXY_SHADOWSTEP_HAND)


@pytest.fixture
def empty_state():
    """No cards anywhere, 30 life."""
    return make_state()
