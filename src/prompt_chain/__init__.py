"""Public package exports."""

from prompt_chain.chain_file import LoadedChainFile
from prompt_chain.chain_file import load_chain_file
from prompt_chain.exceptions import SchemaSyntaxError
from prompt_chain.orchestrator import Orchestrator
from prompt_chain.repository import InMemoryRepository
from prompt_chain.repository import RunRepository
from prompt_chain.run_executor import RunExecutor
from prompt_chain.schema_parser import parse_schema
from prompt_chain.schema_validator import SchemaValidator

__all__ = [
    "InMemoryRepository",
    "LoadedChainFile",
    "Orchestrator",
    "RunExecutor",
    "RunRepository",
    "SchemaSyntaxError",
    "SchemaValidator",
    "load_chain_file",
    "parse_schema",
]
