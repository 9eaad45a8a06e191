import pytest


@pytest.fixture
def nested_lines():
    return [
        "let outer = func() {",   # 0
        "    if (true) {",        # 1
        "        print(1)",       # 2
        "    }",                  # 3
        "    let m = {\"a\": 1}",  # 4
        "}",                      # 5
        "/*",                     # 6
        " * notes",               # 7
        " */",                    # 8
    ]
