import pytest


@pytest.fixture
def program_context(make_context):
    return make_context(
        "\n".join(
            [
                "let helper = func(x) {",
                "    return x * 2",
                "}",
                "let main = func() {",
                "    let a = helper(1)",
                "    let b = helper(a) + len([])",
                "    missing(b)",
                "    return b",
                "}",
                "helper(3)",
                "main()",
            ]
        )
    )


@pytest.fixture
def one_line_function_context(make_context):
    return make_context("let add = func(a, b) { return a + b }\nadd(1, 2)")
