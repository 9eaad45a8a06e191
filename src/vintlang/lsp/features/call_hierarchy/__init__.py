"""LSP call hierarchy feature for VintLang."""

from .call_hierarchy import (
    GLOBAL_CALLER,
    incoming_calls,
    outgoing_calls,
    prepare_call_hierarchy,
    register_call_hierarchy,
)

__all__ = [
    "GLOBAL_CALLER",
    "incoming_calls",
    "outgoing_calls",
    "prepare_call_hierarchy",
    "register_call_hierarchy",
]
