import pytest


@pytest.fixture
def hover_context(make_context):
    return make_context(
        "import time\n"
        "let total = convert(\"12\", \"INTEGER\")\n"
        "println(total)\n"
        "let custom = 1\n"
    )
