"""
Tests for the chat and product HTTP endpoints.
"""
import io
import json
import pytest
from unittest.mock import patch

from exceptions import RemoteServiceError
from models import ChatResult, RunStatus


class TestStartEndpoint:
    @patch("routes.chat.orchestrator")
    def test_start_returns_ids(self, mock_orch, app_client):
        mock_orch.start.return_value = ("thread_1", "run_1")

        resp = app_client.post("/api/chat/start", json={
            "message": "Need a diesel forklift",
            "history": [{"role": "user", "content": "hello"}, {"bad": "entry"}],
            "fileIds": ["file_1", 5],
            "systemInstructions": "Be brief",
        })

        assert resp.status_code == 200
        assert resp.get_json() == {"threadId": "thread_1", "runId": "run_1"}
        start_request = mock_orch.start.call_args[0][0]
        assert start_request.message == "Need a diesel forklift"
        assert start_request.thread_id is None
        assert [(h.role, h.content) for h in start_request.history] == [("user", "hello")]
        assert start_request.file_ids == ["file_1"]
        assert start_request.system_instructions == "Be brief"

    @patch("routes.chat.orchestrator")
    def test_start_passes_existing_thread(self, mock_orch, app_client):
        mock_orch.start.return_value = ("thread_1", "run_2")
        resp = app_client.post("/api/chat/start", json={"message": "more", "threadId": "thread_1"})
        assert resp.get_json()["threadId"] == "thread_1"
        assert mock_orch.start.call_args[0][0].thread_id == "thread_1"

    @pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}, None])
    @patch("routes.chat.orchestrator")
    def test_missing_message_is_400(self, mock_orch, app_client, body):
        if body is None:
            resp = app_client.post("/api/chat/start", data="not json", content_type="text/plain")
        else:
            resp = app_client.post("/api/chat/start", json=body)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Missing message"}
        mock_orch.start.assert_not_called()

    @patch("routes.chat.orchestrator")
    def test_remote_failure_is_500_with_remote_message(self, mock_orch, app_client):
        mock_orch.start.side_effect = RemoteServiceError(
            "Assistant service returned HTTP 401", remote_status=401,
            body='{"error": {"message": "Incorrect API key provided"}}',
        )
        resp = app_client.post("/api/chat/start", json={"message": "hi"})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Incorrect API key provided"}

    @patch("routes.chat.orchestrator")
    def test_unexpected_failure_is_500(self, mock_orch, app_client):
        mock_orch.start.side_effect = RuntimeError("boom")
        resp = app_client.post("/api/chat/start", json={"message": "hi"})
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "boom"}


class TestStatusEndpoint:
    @patch("routes.chat.orchestrator")
    def test_status(self, mock_orch, app_client):
        mock_orch.resolve_status.return_value = RunStatus.COMPLETED
        resp = app_client.get("/api/chat/status?threadId=t&runId=r")
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "completed"}
        mock_orch.resolve_status.assert_called_once_with("t", "r")

    @pytest.mark.parametrize("query", ["", "?threadId=t", "?runId=r"])
    @patch("routes.chat.orchestrator")
    def test_missing_ids_is_400(self, mock_orch, app_client, query):
        resp = app_client.get(f"/api/chat/status{query}")
        assert resp.status_code == 400
        mock_orch.resolve_status.assert_not_called()


class TestResultEndpoint:
    @patch("routes.chat.result_assembler")
    def test_result_with_tool_outputs(self, mock_assembler, app_client):
        mock_assembler.assemble.return_value = ChatResult(reply="", tool_outputs={"generate_filters": {"a": 1}})
        resp = app_client.get("/api/chat/result?threadId=t&runId=r")
        assert resp.get_json() == {"reply": "", "toolOutputs": {"generate_filters": {"a": 1}}}
        mock_assembler.assemble.assert_called_once_with("t", "r")

    @patch("routes.chat.result_assembler")
    def test_run_id_optional(self, mock_assembler, app_client):
        mock_assembler.assemble.return_value = ChatResult(reply="Hello")
        resp = app_client.get("/api/chat/result?threadId=t")
        assert resp.get_json() == {"reply": "Hello"}
        mock_assembler.assemble.assert_called_once_with("t", None)

    def test_missing_thread_is_400(self, app_client):
        assert app_client.get("/api/chat/result").status_code == 400


class TestThreadMessagesEndpoint:
    @patch("routes.chat.assistant_client")
    def test_passthrough(self, mock_client, app_client):
        mock_client.list_messages.return_value = {"object": "list", "data": []}
        resp = app_client.get("/api/chat/thread-messages?threadId=t")
        assert resp.get_json() == {"object": "list", "data": []}

    def test_missing_thread_is_400(self, app_client):
        assert app_client.get("/api/chat/thread-messages").status_code == 400


class TestUploadEndpoint:
    @patch("routes.chat.assistant_client")
    def test_upload_multiple_files(self, mock_client, app_client):
        mock_client.upload_file.side_effect = ["file_a", "file_b"]
        resp = app_client.post("/api/chat/upload", content_type="multipart/form-data", data={
            "files": [(io.BytesIO(b"a"), "a.pdf"), (io.BytesIO(b"b"), "b.txt")],
        })
        assert resp.status_code == 200
        assert resp.get_json() == {"fileIds": ["file_a", "file_b"]}
        assert [c[0][0] for c in mock_client.upload_file.call_args_list] == ["a.pdf", "b.txt"]

    def test_no_files_is_400(self, app_client):
        resp = app_client.post("/api/chat/upload", content_type="multipart/form-data", data={})
        assert resp.status_code == 400

    @patch("routes.chat.assistant_client")
    def test_remote_error_names_the_file(self, mock_client, app_client):
        mock_client.upload_file.side_effect = RemoteServiceError(
            "Assistant service returned HTTP 400", remote_status=400,
            body='{"error": {"message": "Invalid file format"}}',
        )
        resp = app_client.post("/api/chat/upload", content_type="multipart/form-data", data={
            "file": (io.BytesIO(b"x"), "bad.exe"),
        })
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Failed to upload bad.exe: Invalid file format"}


class TestProductEndpoints:
    def test_full_catalog(self, app_client):
        resp = app_client.get("/api/products")
        assert resp.status_code == 200
        assert len(resp.get_json()) == 5

    def test_filters_json_param(self, app_client):
        filters = json.dumps({"powerSource": "electric", "loadCapacity": 6000})
        resp = app_client.get("/api/products", query_string={"filters": filters})
        ids = {p["id"] for p in resp.get_json()}
        assert ids == {"prod-VD-005-X", "prod-TG-553", "prod-LE-7000-Pro"}

    def test_individual_params(self, app_client):
        resp = app_client.get("/api/products?powerSource=electric&loadCapacity=6500")
        ids = {p["id"] for p in resp.get_json()}
        assert ids == {"prod-VD-005-X", "prod-LE-7000-Pro"}

    def test_bad_filters_is_400(self, app_client):
        resp = app_client.get("/api/products", query_string={"filters": "{nope"})
        assert resp.status_code == 400

    @pytest.mark.parametrize("query", [
        {"loadCapacity": "abc"},
        {"filters": json.dumps({"loadCapacity": "abc"})},
        {"filters": json.dumps({"loadCapacity": [6000]})},
    ])
    def test_non_numeric_load_capacity_is_400_either_way(self, app_client, query):
        resp = app_client.get("/api/products", query_string=query)
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "loadCapacity must be a number"}

    def test_numeric_string_capacity_in_filters_json(self, app_client):
        filters = json.dumps({"loadCapacity": "6500"})
        resp = app_client.get("/api/products", query_string={"filters": filters})
        assert {p["id"] for p in resp.get_json()} == {"prod-VD-005-X", "prod-LE-7000-Pro"}

    def test_product_by_id(self, app_client):
        resp = app_client.get("/api/products/prod-GT-6000-Eco")
        assert resp.status_code == 200
        assert resp.get_json()["powerSource"] == "hybrid"

    def test_unknown_product_is_404(self, app_client):
        resp = app_client.get("/api/products/prod-nope")
        assert resp.status_code == 404
        assert "error" in resp.get_json()


class TestServer:
    def test_health(self, app_client):
        data = app_client.get("/health").get_json()
        assert data["status"] == "ok"
        assert data["catalog"]["products_loaded"] == 5
        assert data["assistant_configured"] is True

    def test_cors_allows_any_origin(self, app_client):
        resp = app_client.get("/api/products", headers={"Origin": "https://shop.example"})
        assert resp.headers.get("Access-Control-Allow-Origin") in ("*", "https://shop.example")
