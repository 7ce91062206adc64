"""
Result Assembler - turns a finished run into the client's response.
"""

import json
from typing import Dict, List, Optional, Any

from app_config import NO_REPLY_FALLBACK
from chat_logger import get_logger
from models import ChatResult
from services.assistant_client import AssistantClient

logger = get_logger("advisor_chat")


def extract_reply_text(messages: List[Dict[str, Any]]) -> str:
    """
    Text of the most recent assistant message in the list.

    The list is scanned from the end; the first assistant message found has
    all of its text segments joined with newlines and trimmed.
    """
    for message in reversed(messages):
        if not isinstance(message, dict) or message.get("role") != "assistant":
            continue
        segments = []
        for part in message.get("content") or []:
            if not isinstance(part, dict) or part.get("type") != "text":
                continue
            value = (part.get("text") or {}).get("value")
            if isinstance(value, str):
                segments.append(value)
        return "\n".join(segments).strip()
    return ""


def _decode_output(output: Any) -> Any:
    if isinstance(output, str):
        try:
            return json.loads(output)
        except ValueError:
            return output
    return output


def collect_tool_outputs(steps: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Map tool name -> output for every answered call in the run steps."""
    tool_outputs: Dict[str, Any] = {}
    for step in steps:
        if not isinstance(step, dict) or step.get("type") != "tool_calls":
            continue
        for call in (step.get("step_details") or {}).get("tool_calls") or []:
            function = call.get("function") or {}
            name = call.get("name") or function.get("name")
            output = _decode_output(call.get("output") or function.get("output"))
            if name and output:
                tool_outputs[name] = output
    return tool_outputs


def build_result(reply_text: str, tool_outputs: Optional[Dict[str, Any]]) -> ChatResult:
    if reply_text:
        reply = reply_text
    elif tool_outputs:
        reply = ""
    else:
        reply = NO_REPLY_FALLBACK
    return ChatResult(reply=reply, tool_outputs=tool_outputs or None)


class ResultAssembler:

    def __init__(self, client: AssistantClient):
        self.client = client

    def assemble(self, thread_id: str, run_id: Optional[str] = None) -> ChatResult:
        messages = self.client.list_messages(thread_id).get("data") or []
        reply_text = extract_reply_text(messages)

        tool_outputs: Dict[str, Any] = {}
        if run_id:
            tool_outputs = collect_tool_outputs(self.client.get_run_steps(thread_id, run_id))

        result = build_result(reply_text, tool_outputs)
        logger.info(
            f"Assembled result | thread={thread_id} | run={run_id} | "
            f"reply_chars={len(result.reply)} | tools={sorted(tool_outputs)}"
        )
        return result
