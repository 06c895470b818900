"""Embedded contract catalog and dependency table."""

from .loader import (
    CONTRACT_LIST_FILE,
    DEPENDENCY_PAIRS_FILE,
    contract_list_from_names,
    load_contract_list,
    load_dependency_table,
    parse_contract_list,
    parse_dependency_table,
)

__all__ = [
    "CONTRACT_LIST_FILE",
    "DEPENDENCY_PAIRS_FILE",
    "contract_list_from_names",
    "load_contract_list",
    "load_dependency_table",
    "parse_contract_list",
    "parse_dependency_table",
]
