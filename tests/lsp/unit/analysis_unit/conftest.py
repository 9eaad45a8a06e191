import pytest

from vintlang.lsp.analysis import DocumentStore, SymbolIndexer
from vintlang.lsp.utils.models import Document


@pytest.fixture
def store():
    return DocumentStore()


@pytest.fixture
def indexer():
    return SymbolIndexer()


@pytest.fixture
def function_program():
    return Document(
        uri="file:///workspace/funcs.vint",
        text=(
            "import time\n"
            "// let commented = 1\n"
            "let greet = func(name) {\n"
            "    println(name)\n"
            "}\n"
            "let count = 3\n"
            "greet(count)\n"
            "let now = time.now()\n"
        ),
        version=1,
    )
