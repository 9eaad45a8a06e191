"""
Static language tables for VintLang.

Keywords, builtin functions and standard modules, together with the
documentation and signature tables used by completion, hover, signature help
and inlay hints. Everything here is plain data.
"""

from typing import Dict, FrozenSet, List, Tuple

KEYWORDS: Tuple[str, ...] = (
    "if", "else", "elif", "while", "for", "in", "switch", "case", "default", "break", "continue",
    "func", "return", "let", "declare", "defer", "import", "package", "include",
    "true", "false", "null", "try", "catch", "throw", "finally",
)

BUILTINS: Tuple[str, ...] = (
    "print", "println", "write", "type", "convert", "has_key", "len", "range",
    "split", "join", "replace", "contains", "startsWith", "endsWith", "trim", "upper", "lower",
    "push", "pop", "shift", "unshift", "slice", "splice", "sort", "reverse",
    "abs", "ceil", "floor", "round", "max", "min", "sqrt", "pow", "random",
    "now", "format", "add", "subtract", "isLeapYear", "exec", "env", "args", "exit",
)

MODULES: Tuple[str, ...] = (
    "time", "net", "os", "json", "csv", "regex", "crypto", "encoding", "colors", "term",
)

KEYWORD_SET: FrozenSet[str] = frozenset(KEYWORDS)
BUILTIN_SET: FrozenSet[str] = frozenset(BUILTINS)

# Literal keywords highlighted as constants
LITERAL_KEYWORDS: Tuple[str, ...] = ("true", "false", "null")

# Keywords that open a declarative statement
DECLARATIVE_KEYWORDS: Tuple[str, ...] = ("package", "include", "declare")

DECLARATION_KEYWORD = "let"


HOVER_DOCUMENTATION: Dict[str, str] = {
    "print": '**print(value)** - Prints a value to the console\n\n```vint\nprint("Hello, World!")\n```',
    "println": '**println(value)** - Prints a value to the console with a newline\n\n```vint\nprintln("Hello, World!")\n```',
    "func": "**func** - Defines a function\n\n```vint\nlet myFunction = func(param1, param2) {\n    return param1 + param2\n}\n```",
    "let": '**let** - Declares a variable\n\n```vint\nlet myVariable = "Hello"\nlet myNumber = 42\n```',
    "if": "**if** - Conditional statement\n\n```vint\nif (condition) {\n    // code\n} else {\n    // alternative code\n}\n```",
    "for": "**for** - Loop statement\n\n```vint\nfor item in collection {\n    print(item)\n}\n```",
    "while": "**while** - Loop statement\n\n```vint\nwhile (condition) {\n    // code\n}\n```",
    "import": "**import** - Imports a module\n\n```vint\nimport time\nimport net\n```",
    "type": '**type(value)** - Returns the type of a value\n\n```vint\nlet t = type(42)  // "INTEGER"\n```',
    "convert": '**convert(value, type)** - Converts a value to the specified type\n\n```vint\nlet str = "123"\nconvert(str, "INTEGER")\n```',
    "time": (
        "**time** - Module for time-related operations\n\nFunctions:\n"
        "- `now()` - Get current timestamp\n"
        "- `format(time, layout)` - Format time\n"
        "- `add(time, duration)` - Add duration to time\n"
        "- `subtract(time, duration)` - Subtract duration from time\n"
        "- `isLeapYear(year)` - Check if year is leap year"
    ),
    "net": (
        "**net** - Module for network operations\n\nFunctions:\n"
        "- `get(url)` - HTTP GET request\n"
        "- `post(url, data)` - HTTP POST request\n"
        "- `put(url, data)` - HTTP PUT request\n"
        "- `delete(url)` - HTTP DELETE request"
    ),
    "json": "**json** - Module for JSON operations\n\nFunctions:\n- `parse(text)` - Parse a JSON string\n- `stringify(value)` - Serialize a value to JSON",
    "defer": '**defer** - Defers execution until function returns\n\n```vint\nlet myFunc = func() {\n    defer println("This runs last")\n    println("This runs first")\n}\n```',
}


# Parameter names of builtins with a known signature
BUILTIN_SIGNATURES: Dict[str, List[str]] = {
    "print": ["value"],
    "println": ["value"],
    "write": ["value"],
    "type": ["value"],
    "len": ["value"],
    "convert": ["value", "type"],
    "has_key": ["map", "key"],
    "range": ["start", "end"],
    "split": ["text", "separator"],
    "join": ["array", "separator"],
    "replace": ["text", "old", "new"],
    "contains": ["text", "substring"],
    "startsWith": ["text", "prefix"],
    "endsWith": ["text", "suffix"],
    "push": ["array", "value"],
    "slice": ["array", "start", "end"],
    "pow": ["base", "exponent"],
    "max": ["a", "b"],
    "min": ["a", "b"],
    "format": ["time", "layout"],
    "add": ["time", "duration"],
    "subtract": ["time", "duration"],
    "isLeapYear": ["year"],
}

# Builtins that get parameter-name inlay hints
INLAY_HINT_FUNCTIONS: FrozenSet[str] = frozenset(
    name for name, params in BUILTIN_SIGNATURES.items() if len(params) > 1
)


def is_reserved(word: str) -> bool:
    """Return True for keywords and builtins, which can never be user symbols."""
    return word in KEYWORD_SET or word in BUILTIN_SET


def signature_label(name: str) -> str:
    """Render a builtin signature as ``name(a, b)``."""
    return f"{name}({', '.join(BUILTIN_SIGNATURES.get(name, []))})"
