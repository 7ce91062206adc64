"""
Pytest configuration and fixtures for the advisor relay tests.

Provides a mocked AssistantClient, an orchestrator wired to it with a
recording sleep, and a Flask test client.
"""

import os

os.environ.setdefault("OPENAI_API_KEY", "sk-test-key")
os.environ.setdefault("OPENAI_ASSISTANT_ID", "asst_test")

import pytest
from unittest.mock import MagicMock

from catalog import Catalog, PRODUCTS
from services.assistant_client import AssistantClient
from services.run_orchestrator import RunOrchestrator


def make_run(status, tool_calls=None, run_id="run_1"):
    """Remote run body; tool_calls populates required_action."""
    run = {"id": run_id, "object": "thread.run", "status": status}
    if tool_calls is not None:
        run["required_action"] = {
            "type": "submit_tool_outputs",
            "submit_tool_outputs": {"tool_calls": tool_calls},
        }
    return run


def function_call(call_id, name, arguments):
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


class SleepRecorder:
    """Stands in for time.sleep so poll loops finish instantly."""

    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def sample_catalog():
    return Catalog(PRODUCTS)


@pytest.fixture
def fake_client():
    client = MagicMock(spec=AssistantClient)
    client.create_thread.return_value = "thread_new"
    client.post_message.return_value = "msg_1"
    client.create_run.return_value = ("run_1", "queued")
    return client


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def orchestrator(fake_client, sample_catalog, sleep_recorder):
    return RunOrchestrator(
        fake_client,
        catalog=sample_catalog,
        poll_interval=1.0,
        max_poll_attempts=30,
        sleep=sleep_recorder,
        assistant_id_provider=lambda: "asst_test",
    )


@pytest.fixture
def app_client():
    from server import app
    app.testing = True
    return app.test_client()
