import pytest

from vintlang.lsp.features.completion.completion import completion_items


@pytest.fixture
def items():
    return completion_items()


@pytest.fixture
def items_by_label(items):
    return {item.label: item for item in items}
