"""
Extraction agent schemas.

Structured output schema requested from the thinking tier and the transient
conversation state the orchestrator keeps while talking to the model.

Dependencies: dataclasses, enum
System role: Agent schema and state definitions
"""

from dataclasses import dataclass, field
from enum import Enum

_NULLABLE_STRING = {"type": "STRING", "nullable": True}

TASK_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "tasks": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {
                        "type": "STRING",
                        "description": "Clear, concise title summarizing the task",
                    },
                    "details": {
                        "type": "STRING",
                        "description": "Detailed explanation of the task in HTML format",
                    },
                    "assignee": {**_NULLABLE_STRING, "description": "Person assigned to the task"},
                    "group": {**_NULLABLE_STRING, "description": "Group responsible for the task"},
                    "category": {**_NULLABLE_STRING, "description": "Category the task belongs to"},
                    "dueDate": {**_NULLABLE_STRING, "description": "Due date in YYYY-MM-DD format"},
                    "priority": {
                        "type": "STRING",
                        "enum": ["Low", "Medium", "High", "Critical"],
                        "description": "Task priority level",
                    },
                    "ticketNumber": {**_NULLABLE_STRING, "description": "Associated ticket number"},
                    "externalUrl": {
                        **_NULLABLE_STRING,
                        "description": "External URL related to the task",
                    },
                },
                "required": ["title", "details"],
            },
        }
    },
    "required": ["tasks"],
}


class OrchestratorState(str, Enum):
    """Conversation lifecycle."""

    INIT = "init"
    AWAITING_INITIAL = "awaiting_initial"
    AWAITING_CONTINUATION = "awaiting_continuation"
    DONE = "done"
    ABORTED = "aborted"


class TurnKind(str, Enum):
    INITIAL = "initial"
    CONTINUATION = "continuation"
    WRAP_UP = "wrap_up"
    REASONING = "reasoning"


@dataclass(slots=True)
class Turn:
    """One request/response exchange."""

    kind: TurnKind
    prompt: str
    reply: str = ""


@dataclass(slots=True)
class ConversationState:
    """
    Transient state of one extraction conversation.

    ``buffer`` holds the extraction replies (initial turn and continuations)
    in order; reasoning replies are kept apart in ``reasoning`` so they never
    break the completeness check.
    """

    turns: list[Turn] = field(default_factory=list)
    buffer: str = ""
    reasoning: str = ""
    continuation_rounds: int = 0
    complete: bool = False
    state: OrchestratorState = OrchestratorState.INIT

    @property
    def transcript(self) -> str:
        """Every reply, extraction first."""
        if not self.reasoning:
            return self.buffer
        return f"{self.buffer}\n{self.reasoning}"

    def record(self, kind: TurnKind, prompt: str, reply: str) -> None:
        self.turns.append(Turn(kind=kind, prompt=prompt, reply=reply))
        if kind is TurnKind.REASONING:
            self.reasoning += reply
        else:
            self.buffer += reply
