"""Recognition blueprint forwarding images to the configured engine."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest, ServiceUnavailable

from recognition import EmbeddingService, FaceProcessService, ProcessImageParams
from utils.request_validation import bool_arg, float_arg, int_arg, parse_json_request

API_V1 = "/api/v1"
API_KEY_HEADER = "x-api-key"
PREDICTION_COUNT = "prediction_count"
TIME_DEFAULT_MINUTES = 60

recognition_bp = Blueprint("recognition", __name__)


def _require_api_key() -> str:
    api_key = (request.headers.get(API_KEY_HEADER) or "").strip()
    if not api_key:
        raise BadRequest(f"Missing required header {API_KEY_HEADER}.")
    return api_key


def _face_process_service() -> FaceProcessService:
    service = current_app.extensions.get("face_process_service")
    if service is None:
        raise ServiceUnavailable("Recognition engine is not configured.")
    return service


def _embedding_service() -> EmbeddingService:
    service = current_app.extensions.get("embedding_service")
    if service is None:
        raise ServiceUnavailable("Embedding records are not available.")
    return service


def _common_params(api_key: str) -> ProcessImageParams:
    return ProcessImageParams(
        api_key=api_key,
        limit=int_arg(request, "limit", 0, minimum=0),
        det_prob_threshold=float_arg(request, "det_prob_threshold"),
        face_plugins=request.args.get("face_plugins", ""),
        status=bool_arg(request, "status", False),
        additional_params={
            PREDICTION_COUNT: int_arg(request, PREDICTION_COUNT, 1, minimum=1)
        },
    )


@recognition_bp.route("/recognition/recognize", methods=["POST"])
def recognize():
    """Recognize faces in a multipart upload or a base64 JSON body."""

    api_key = _require_api_key()
    params = _common_params(api_key)

    if request.mimetype == "multipart/form-data":
        file = request.files.get("file")
        if not isinstance(file, FileStorage) or not file.filename:
            raise BadRequest("An image file is required.")
        params.file = file.read()
    elif request.is_json:
        payload = parse_json_request(request, required_keys=["file"])
        content = payload["file"]
        if not isinstance(content, str):
            raise BadRequest("file must be a base64 encoded string.")
        params.image_base64 = content
    else:
        raise BadRequest("Request must be multipart/form-data or application/json.")

    return jsonify(_face_process_service().process_image(params))


@recognition_bp.route("/recognition/recognize", methods=["GET"])
def list_embeddings_by_time():
    """List embedding processing-time records for the caller's API key."""

    api_key = _require_api_key()
    # Validated like POST; unused by the records query.
    int_arg(request, "limit", 0, minimum=0)
    int_arg(request, PREDICTION_COUNT, 1, minimum=1)
    time = int_arg(request, "time", TIME_DEFAULT_MINUTES, minimum=1)

    records = _embedding_service().list_embeddings_by_time(api_key, time)
    return jsonify(records)
