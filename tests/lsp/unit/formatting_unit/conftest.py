import pytest


@pytest.fixture
def messy_source():
    return (
        "let f = func(a) {\n"
        "if (a) {\n"
        "        print(a)\n"
        "  }\n"
        "   \n"
        "}\n"
        "f(1)"
    )


@pytest.fixture
def formatted_source():
    return (
        "let f = func(a) {\n"
        "    if (a) {\n"
        "        print(a)\n"
        "    }\n"
        "\n"
        "}\n"
        "f(1)"
    )
