import pytest
from lsprotocol import types


@pytest.fixture
def red():
    return types.Color(red=1.0, green=0.0, blue=0.0, alpha=1.0)


@pytest.fixture
def edit_range():
    return types.Range(
        start=types.Position(line=0, character=9),
        end=types.Position(line=0, character=16),
    )
