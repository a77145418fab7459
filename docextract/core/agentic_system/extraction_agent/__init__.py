"""
Document extraction agent module.

Provides the conversation orchestrator and the consolidation pass.

Dependencies: docextract.boundary.llm, docextract.core.recovery
System role: Agent module exports
"""

from docextract.core.agentic_system.extraction_agent.consolidation_agent import (
    ConsolidationAgent,
)
from docextract.core.agentic_system.extraction_agent.extraction_agent import ExtractionAgent
from docextract.core.agentic_system.extraction_agent.extraction_schema import (
    TASK_SCHEMA,
    ConversationState,
    OrchestratorState,
)

__all__ = [
    "ConsolidationAgent",
    "ConversationState",
    "ExtractionAgent",
    "OrchestratorState",
    "TASK_SCHEMA",
]
