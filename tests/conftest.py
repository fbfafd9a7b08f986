"""
Pytest configuration for mpcomb tests.

Provides:
- Hypothesis profiles ("default", and "ci" selected with MPCOMB_HYPOTHESIS_PROFILE=ci)
- `Counting`, a parser stub that records how often it was invoked
"""

import os

import pytest
from hypothesis import settings

settings.register_profile("default", max_examples=200, print_blob=True)
settings.register_profile("ci", max_examples=1000, print_blob=True, derandomize=True)
settings.load_profile(os.environ.get("MPCOMB_HYPOTHESIS_PROFILE", "default"))


class Counting:
    """Wraps a parser and counts invocations."""

    def __init__(self, parser):
        self.parser = parser
        self.calls = 0

    def __call__(self, inp):
        self.calls += 1
        return self.parser(inp)


@pytest.fixture
def counting():
    return Counting
