"""
Chat endpoints as a Flask Blueprint.

Flow seen by the client:
    POST /api/chat/start   → {threadId, runId}
    GET  /api/chat/status  → {status}      (poll; answers tool calls as a side effect)
    GET  /api/chat/result  → {reply, toolOutputs?}
"""

from flask import Blueprint, request, jsonify

from chat_logger import get_logger, truncate_for_log
from core import parse_start_request, require_param
from exceptions import RemoteServiceError, ValidationError
from services.assistant_client import assistant_client
from services.run_orchestrator import RunOrchestrator
from services.result_assembler import ResultAssembler

logger = get_logger("advisor_chat")

chat_bp = Blueprint("chat", __name__, url_prefix="/api/chat")

orchestrator = RunOrchestrator(assistant_client)
result_assembler = ResultAssembler(assistant_client)


@chat_bp.route("/start", methods=["POST"])
def start():
    """
    Start an assistant run for one user message.

    Request:
        POST /api/chat/start
        {
            "message": "I need an indoor forklift for 6t pallets",
            "threadId": "thread_abc",            (optional, continue a conversation)
            "systemInstructions": "...",         (optional)
            "history": [{"role": "user", "content": "..."}],  (optional, new threads only)
            "fileIds": ["file_123"]              (optional)
        }

    Response:
        {"threadId": "thread_abc", "runId": "run_xyz"}
    """
    body = request.get_json(silent=True)
    start_request = parse_start_request(body)
    logger.info(
        f'POST /api/chat/start | thread={start_request.thread_id} | '
        f'message="{truncate_for_log(start_request.message)}" | '
        f'history={len(start_request.history)} | files={len(start_request.file_ids)}'
    )

    thread_id, run_id = orchestrator.start(start_request)
    return jsonify({"threadId": thread_id, "runId": run_id}), 200


@chat_bp.route("/status", methods=["GET"])
def status():
    """Current run status; pending tool calls are answered before returning."""
    thread_id = request.args.get("threadId")
    run_id = request.args.get("runId")
    if not thread_id or not run_id:
        raise ValidationError("Missing threadId or runId")

    logger.info(f"GET /api/chat/status | thread={thread_id} | run={run_id}")
    run_status = orchestrator.resolve_status(thread_id, run_id)
    return jsonify({"status": run_status.value}), 200


@chat_bp.route("/result", methods=["GET"])
def result():
    """Latest assistant reply plus tool outputs of the given run."""
    thread_id = require_param(request.args.get("threadId"), "threadId")
    run_id = request.args.get("runId") or None

    logger.info(f"GET /api/chat/result | thread={thread_id} | run={run_id}")
    chat_result = result_assembler.assemble(thread_id, run_id)
    return jsonify(chat_result.to_dict()), 200


@chat_bp.route("/thread-messages", methods=["GET"])
def thread_messages():
    """Debug passthrough of the raw remote message list."""
    thread_id = require_param(request.args.get("threadId"), "threadId")
    logger.info(f"GET /api/chat/thread-messages | thread={thread_id}")
    return jsonify(assistant_client.list_messages(thread_id)), 200


@chat_bp.route("/upload", methods=["POST"])
def upload():
    """Forward every uploaded file to the assistant file store."""
    files = [f for _, f in request.files.items(multi=True) if f and f.filename]
    if not files:
        raise ValidationError("No files uploaded")

    logger.info(f"POST /api/chat/upload | files={[truncate_for_log(f.filename) for f in files]}")
    file_ids = []
    for storage in files:
        try:
            file_id = assistant_client.upload_file(storage.filename, storage.stream, storage.mimetype)
        except RemoteServiceError as e:
            logger.error(f"Upload failed | file={truncate_for_log(storage.filename)} | error={e.remote_message}")
            return jsonify({"error": f"Failed to upload {storage.filename}: {e.remote_message}"}), 500
        file_ids.append(file_id)

    return jsonify({"fileIds": file_ids}), 200
