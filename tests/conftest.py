import io

import pytest

from simplex.interpreter import Interpreter


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def interp(output):
    """Interpreter with natives and the bootstrap library; prints go to `output`."""
    return Interpreter(input=io.StringIO(""), output=output)


@pytest.fixture
def bare(output):
    """Interpreter with natives only."""
    return Interpreter(prelude=None, input=io.StringIO(""), output=output)
