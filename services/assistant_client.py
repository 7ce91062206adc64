"""
HTTP client for the remote assistant service (threads, messages, runs, files).

Every call is a single blocking request/response. Credentials and the beta
header are read from the environment on each call, no session is pooled and
nothing is retried here: failures raise RemoteServiceError to the caller.
"""

import time
from typing import List, Dict, Optional, Any, Tuple, IO

import requests

from app_config import (
    OPENAI_API_BASE_URL,
    OPENAI_BETA_HEADER,
    REQUEST_TIMEOUT,
    LIST_PAGE_SIZE,
    FILE_UPLOAD_PURPOSE,
    get_api_key,
)
from chat_logger import get_logger, mask_secret
from exceptions import RemoteServiceError

logger = get_logger("advisor_chat")


class AssistantClient:
    """Thin wrapper over the assistant service REST API."""

    def __init__(self, base_url: str = OPENAI_API_BASE_URL, timeout: int = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _headers(self, json_body: bool = True) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {get_api_key()}",
            "OpenAI-Beta": OPENAI_BETA_HEADER,
        }
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _request(self, method: str, path: str, *, json: Optional[dict] = None,
                 params: Optional[dict] = None, files: Optional[dict] = None,
                 data: Optional[dict] = None) -> Any:
        """Issue one request and return the parsed JSON body."""
        url = f"{self.base_url}{path}"
        logger.info(f"Assistant API request: {method} {path}")
        start_time = time.time()

        try:
            resp = requests.request(
                method=method,
                url=url,
                headers=self._headers(json_body=files is None),
                json=json,
                params=params,
                files=files,
                data=data,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            response_time_ms = int((time.time() - start_time) * 1000)
            logger.error(
                f"Assistant API transport error: {method} {path} | "
                f"error={mask_secret(str(e))} | response_time_ms={response_time_ms}"
            )
            raise RemoteServiceError(f"Assistant service unreachable: {e}") from e

        response_time_ms = int((time.time() - start_time) * 1000)

        if not 200 <= resp.status_code < 300:
            logger.error(
                f"Assistant API error: {method} {path} | status={resp.status_code} | "
                f"body={mask_secret(resp.text[:500])} | response_time_ms={response_time_ms}"
            )
            raise RemoteServiceError(
                f"Assistant service returned HTTP {resp.status_code}",
                remote_status=resp.status_code,
                body=resp.text,
            )

        try:
            body = resp.json()
        except ValueError as e:
            logger.error(f"Assistant API returned non-JSON body: {method} {path} | body={resp.text[:200]}")
            raise RemoteServiceError(
                "Assistant service returned a malformed response",
                remote_status=resp.status_code,
                body=resp.text,
            ) from e

        logger.info(
            f"Assistant API response: {method} {path} | status={resp.status_code} | "
            f"response_time_ms={response_time_ms}"
        )
        return body

    @staticmethod
    def _require(body: Any, key: str, what: str) -> Any:
        if not isinstance(body, dict) or not body.get(key):
            raise RemoteServiceError(f"Assistant service response for {what} is missing '{key}'",
                                     body=str(body))
        return body[key]

    def _list_all(self, path: str, what: str) -> List[Dict[str, Any]]:
        """Every item of a list endpoint, oldest first, following has_more/after."""
        items: List[Dict[str, Any]] = []
        after = None
        while True:
            params = {"order": "asc", "limit": LIST_PAGE_SIZE}
            if after:
                params["after"] = after
            body = self._request("GET", path, params=params)
            page = body.get("data") if isinstance(body, dict) else None
            if not isinstance(page, list):
                raise RemoteServiceError(f"Assistant service returned a malformed {what} list",
                                         body=str(body))
            items.extend(page)
            if not body.get("has_more") or not page:
                return items
            after = page[-1].get("id") if isinstance(page[-1], dict) else None
            if not after:
                raise RemoteServiceError(f"Assistant service {what} page has no cursor id",
                                         body=str(body))

    # ─── Threads & messages ───

    def create_thread(self) -> str:
        body = self._request("POST", "/threads", json={})
        return self._require(body, "id", "create thread")

    def post_message(self, thread_id: str, role: str, content: str,
                     attachments: Optional[List[Dict[str, Any]]] = None) -> str:
        payload: Dict[str, Any] = {"role": role, "content": content}
        if attachments:
            payload["attachments"] = attachments
        body = self._request("POST", f"/threads/{thread_id}/messages", json=payload)
        return self._require(body, "id", "post message")

    def list_messages(self, thread_id: str) -> Dict[str, Any]:
        """All messages of a thread, oldest first, in one list body."""
        messages = self._list_all(f"/threads/{thread_id}/messages", "message")
        return {
            "object": "list",
            "data": messages,
            "first_id": messages[0].get("id") if messages else None,
            "last_id": messages[-1].get("id") if messages else None,
            "has_more": False,
        }

    # ─── Runs ───

    def create_run(self, thread_id: str, assistant_id: str) -> Tuple[str, str]:
        body = self._request("POST", f"/threads/{thread_id}/runs", json={"assistant_id": assistant_id})
        return self._require(body, "id", "create run"), body.get("status", "")

    def get_run(self, thread_id: str, run_id: str) -> Dict[str, Any]:
        body = self._request("GET", f"/threads/{thread_id}/runs/{run_id}")
        if not isinstance(body, dict):
            raise RemoteServiceError("Assistant service returned a malformed run", body=str(body))
        return body

    def get_run_steps(self, thread_id: str, run_id: str) -> List[Dict[str, Any]]:
        """All steps of a run in execution order."""
        return self._list_all(f"/threads/{thread_id}/runs/{run_id}/steps", "run step")

    def submit_tool_outputs(self, thread_id: str, run_id: str,
                            outputs: List[Dict[str, str]]) -> Dict[str, Any]:
        body = self._request(
            "POST",
            f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs",
            json={"tool_outputs": outputs},
        )
        if not isinstance(body, dict):
            raise RemoteServiceError("Assistant service returned a malformed run", body=str(body))
        return body

    # ─── Files ───

    def upload_file(self, filename: str, stream: IO[bytes],
                    content_type: Optional[str] = None) -> str:
        body = self._request(
            "POST",
            "/files",
            files={"file": (filename, stream, content_type or "application/octet-stream")},
            data={"purpose": FILE_UPLOAD_PURPOSE},
        )
        return self._require(body, "id", f"upload {filename}")


# Global client instance
assistant_client = AssistantClient()
