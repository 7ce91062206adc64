"""Services package - exports all service modules."""

from .assistant_client import AssistantClient, assistant_client
from .tool_handlers import (
    TOOL_HANDLERS,
    build_tool_registry,
    generate_filters,
    recommend_products,
)
from .run_orchestrator import RunOrchestrator
from .result_assembler import ResultAssembler

__all__ = [
    "AssistantClient",
    "assistant_client",
    "TOOL_HANDLERS",
    "build_tool_registry",
    "generate_filters",
    "recommend_products",
    "RunOrchestrator",
    "ResultAssembler",
]
