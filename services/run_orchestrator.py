"""
Run Orchestrator - drives a conversation turn on the assistant service.

Lifecycle per (thread_id, run_id):

    Created → Polling → RequiresAction → Polling → Completed | Failed

start() creates or reuses the thread, posts the turn and creates the run.
resolve_status() is called on every client poll; when the run is waiting on
function calls it answers them from the tool registry, submits them in one
batch and waits (bounded) for the run to move on.
"""

import time
from typing import Callable, Dict, List, Any, Tuple

from app_config import RUN_POLL_INTERVAL_SECONDS, RUN_POLL_MAX_ATTEMPTS, get_assistant_id
from catalog import Catalog, catalog as default_catalog
from chat_logger import get_logger, truncate_for_log
from models import RunStatus, ToolCall, ToolOutput, StartRequest
from services.assistant_client import AssistantClient
from services.tool_handlers import build_tool_registry, safe_parse_arguments

logger = get_logger("advisor_chat")


def pending_tool_calls(run: Dict[str, Any]) -> List[ToolCall]:
    """Tool calls listed in the run's required_action, in the order given."""
    required_action = run.get("required_action") or {}
    submit = required_action.get("submit_tool_outputs") or {}
    calls = submit.get("tool_calls") or []
    return [ToolCall.from_remote(c) for c in calls if isinstance(c, dict)]


class RunOrchestrator:

    def __init__(
        self,
        client: AssistantClient,
        catalog: Catalog = default_catalog,
        poll_interval: float = RUN_POLL_INTERVAL_SECONDS,
        max_poll_attempts: int = RUN_POLL_MAX_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
        assistant_id_provider: Callable[[], str] = get_assistant_id,
    ):
        self.client = client
        self.tools = build_tool_registry(catalog)
        self.poll_interval = poll_interval
        self.max_poll_attempts = max_poll_attempts
        self._sleep = sleep
        self._assistant_id = assistant_id_provider

    # ─── Start ───

    def start(self, request: StartRequest) -> Tuple[str, str]:
        """Post the user's turn and start a run. Returns (thread_id, run_id)."""
        thread_id = request.thread_id
        if thread_id:
            logger.info(f"Reusing thread {thread_id}")
        else:
            thread_id = self.client.create_thread()
            logger.info(f"Created thread {thread_id} | history_messages={len(request.history)}")
            for past in request.history:
                self.client.post_message(thread_id, past.role, past.content)

        if request.system_instructions:
            self.client.post_message(thread_id, "user", request.system_instructions)

        attachments = [
            {"file_id": file_id, "tools": [{"type": "file_search"}]}
            for file_id in request.file_ids
        ]
        self.client.post_message(thread_id, "user", request.message, attachments=attachments or None)
        logger.info(
            f"Posted user message | thread={thread_id} | attachments={len(attachments)} | "
            f"message=\"{truncate_for_log(request.message)}\""
        )

        run_id, status = self.client.create_run(thread_id, self._assistant_id())
        logger.info(f"Created run {run_id} | thread={thread_id} | status={status}")
        return thread_id, run_id

    # ─── Status resolution ───

    def resolve_status(self, thread_id: str, run_id: str) -> RunStatus:
        run = self.client.get_run(thread_id, run_id)
        status = self._status_of(run)
        logger.info(f"Run status | thread={thread_id} | run={run_id} | status={status.value}")

        if status != RunStatus.REQUIRES_ACTION:
            return status

        calls = pending_tool_calls(run)
        function_calls = [c for c in calls if c.is_function]
        skipped = len(calls) - len(function_calls)
        if skipped:
            logger.info(f"Skipping {skipped} non-function tool call(s) | run={run_id}")

        if not function_calls:
            # Nothing for us to answer; just look again.
            return self._status_of(self.client.get_run(thread_id, run_id))

        outputs = [self.answer(call) for call in function_calls]
        logger.info(
            f"Submitting {len(outputs)} tool output(s) | run={run_id} | "
            f"tools={[c.name for c in function_calls]}"
        )
        submitted = self.client.submit_tool_outputs(
            thread_id, run_id, [o.to_payload() for o in outputs]
        )
        return self._wait_for_terminal(thread_id, run_id, self._status_of(submitted))

    def answer(self, call: ToolCall) -> ToolOutput:
        """Synthesize the output for one function call."""
        arguments = safe_parse_arguments(call.raw_arguments)
        handler = self.tools.get(call.name)
        if handler is None:
            logger.info(f"No handler for tool {call.name!r}; echoing arguments")
            return ToolOutput(call.id, arguments)
        return ToolOutput(call.id, handler(arguments))

    def _wait_for_terminal(self, thread_id: str, run_id: str, status: RunStatus) -> RunStatus:
        attempts = 0
        while not status.is_terminal and attempts < self.max_poll_attempts:
            # A new round of tool calls is answered on the client's next poll
            if status == RunStatus.REQUIRES_ACTION:
                logger.info(f"Run needs another round of tool outputs | run={run_id} | attempt={attempts}")
                return status
            self._sleep(self.poll_interval)
            status = self._status_of(self.client.get_run(thread_id, run_id))
            attempts += 1
            logger.debug(f"Polling after tool output | run={run_id} | attempt={attempts} | status={status.value}")

        if not status.is_terminal and status != RunStatus.REQUIRES_ACTION:
            logger.warning(
                f"Run still pending after {attempts} poll(s) | run={run_id} | status={status.value}"
            )
        return status

    @staticmethod
    def _status_of(run: Dict[str, Any]) -> RunStatus:
        raw = run.get("status")
        status = RunStatus.parse(raw)
        if status == RunStatus.UNKNOWN:
            logger.warning(f"Unexpected run status from assistant service: {raw!r}")
        return status
