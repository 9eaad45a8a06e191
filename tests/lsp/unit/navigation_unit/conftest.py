import pytest

NAVIGATION_SOURCE = (
    "import json\n"
    "let counter = 0\n"
    "let bump = func(step) {\n"
    "    counter = counter + step\n"
    "}\n"
    "bump(1)\n"
    "println(counter)\n"
)


@pytest.fixture
def nav_context(make_context):
    return make_context(NAVIGATION_SOURCE)
