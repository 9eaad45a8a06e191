import pytest


@pytest.fixture
def hints_source():
    return "\n".join(
        [
            'let name = "vint"',
            "let count = 42",
            "let ratio = 0.5",
            "let flag = true // on",
            "let items = [1, 2]",
            'let conf = {"a": 1}',
            "let fn = func(x) {",
            "let other = name",
            'let joined = replace(name, "a", "b")',
            "print(len(items))",
            '// let skipped = "x"',
        ]
    )


@pytest.fixture
def hints_context(make_context, hints_source):
    return make_context(hints_source)
