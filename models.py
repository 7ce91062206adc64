"""
Data models for the Forklift Advisor chat relay.
"""

import json
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any


class RunStatus(Enum):
    QUEUED          = "queued"
    IN_PROGRESS     = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING      = "cancelling"
    CANCELLED       = "cancelled"
    FAILED          = "failed"
    COMPLETED       = "completed"
    INCOMPLETE      = "incomplete"
    EXPIRED         = "expired"

    # Anything the remote service reports outside the known vocabulary
    UNKNOWN         = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "RunStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = {
    RunStatus.COMPLETED,
    RunStatus.FAILED,
    RunStatus.CANCELLED,
    RunStatus.EXPIRED,
    RunStatus.INCOMPLETE,
}


@dataclass
class ToolCall:
    """A pending call surfaced while a run is in requires_action."""
    id: str
    type: str
    name: Optional[str] = None
    raw_arguments: Any = ""

    @property
    def is_function(self) -> bool:
        return self.type == "function"

    @classmethod
    def from_remote(cls, data: Dict[str, Any]) -> "ToolCall":
        function = data.get("function") or {}
        return cls(
            id=data.get("id", ""),
            type=data.get("type", ""),
            name=function.get("name"),
            raw_arguments=function.get("arguments") or "",
        )


@dataclass
class ToolOutput:
    tool_call_id: str
    output: Any

    def to_payload(self) -> Dict[str, str]:
        """Wire shape expected by submit_tool_outputs (output is a JSON string)."""
        output = self.output if isinstance(self.output, str) else json.dumps(self.output)
        return {"tool_call_id": self.tool_call_id, "output": output}


@dataclass
class HistoryMessage:
    role: str
    content: str


@dataclass
class StartRequest:
    message: str
    thread_id: Optional[str] = None
    system_instructions: Optional[str] = None
    history: List[HistoryMessage] = field(default_factory=list)
    file_ids: List[str] = field(default_factory=list)


@dataclass
class ChatResult:
    reply: str
    tool_outputs: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"reply": self.reply}
        if self.tool_outputs:
            d["toolOutputs"] = self.tool_outputs
        return d
