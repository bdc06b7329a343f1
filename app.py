"""
VSL Player Service - Player configuration, project storage and embed code export.
Port: 6010
"""
import json
import sys
from datetime import datetime, timezone
from functools import wraps

from flask import Flask, Response, g, jsonify, request
from loguru import logger
from pydantic import ValidationError

from config import settings
from database.connection import init_db
from services.vsl_player import (
    EmbedGenerator,
    PlayerConfig,
    PreviewPlayer,
    ProjectStore,
    SessionRegistry,
    VSLPlayerError,
    sample_curve,
)

logger.remove()
logger.add(sys.stderr, level=settings.LOG_LEVEL)

app = Flask(__name__)

SERVICE_NAME = settings.SERVICE_NAME
SERVICE_VERSION = settings.SERVICE_VERSION
SERVICE_PORT = settings.SERVICE_PORT

init_db()
SESSIONS = SessionRegistry()
PROJECTS = ProjectStore()


@app.errorhandler(VSLPlayerError)
def handle_service_error(error: VSLPlayerError):
    return jsonify(error.to_dict()), error.status_code


@app.errorhandler(ValidationError)
def handle_validation_error(error: ValidationError):
    return jsonify({
        "status": "error",
        "code": "validation_error",
        "error": "Invalid player configuration",
        "details": json.loads(error.json()),
    }), 400


def require_session(view):
    """Resolve the bearer token into g.owner before running the view."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        token = header[7:].strip() if header.lower().startswith("bearer ") else None
        session = SESSIONS.resolve(token)
        g.owner = session.email
        g.token = session.token
        return view(*args, **kwargs)
    return wrapper


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat()
    })


@app.route("/api/auth/login", methods=["POST"])
def login():
    """Start a local session for an e-mail/password pair."""
    data = _json_body()
    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "email and password required"}), 400

    session = SESSIONS.login(email, password)
    return jsonify({"status": "success", **session.to_api()})


@app.route("/api/auth/logout", methods=["POST"])
@require_session
def logout():
    SESSIONS.logout(g.token)
    return jsonify({"status": "success"})


@app.route("/api/defaults", methods=["GET"])
def defaults():
    """Configuration a new project starts from."""
    return jsonify({"status": "success", "config": PlayerConfig().to_api()})


@app.route("/api/embed/generate", methods=["POST"])
def generate_embed():
    """Generate embed code for an unsaved configuration."""
    data = _json_body()
    instance_id = data.pop("instanceId", None)
    locale = data.pop("locale", None)

    if locale and locale not in settings.SUPPORTED_LOCALES:
        return jsonify({"error": f"Unsupported locale: {locale}"}), 400
    if instance_id is not None and not isinstance(instance_id, str):
        return jsonify({"error": "instanceId must be a string"}), 400

    config = PlayerConfig.model_validate(data)
    generator = EmbedGenerator(locale=locale)
    instance_id = instance_id or generator.id_factory()

    try:
        code = generator.generate(config, instance_id=instance_id)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    logger.info(f"Embed code generated for '{config.display_name}'")
    return jsonify({
        "status": "success",
        "instanceId": instance_id,
        "code": code
    })


@app.route("/api/preview/curve", methods=["POST"])
def preview_curve():
    """Sample the retention curve for the editor's chart."""
    data = _json_body()
    try:
        exponent = float(data.get("retentionSpeed", 0.5))
        points = int(data.get("points", 11))
        samples = sample_curve(exponent, points)
    except (TypeError, ValueError) as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "status": "success",
        "retentionSpeed": exponent,
        "points": [{"fraction": f, "percent": p} for f, p in samples]
    })


@app.route("/api/preview/simulate", methods=["POST"])
def preview_simulate():
    """Replay viewer events against a configuration and report the player state."""
    data = _json_body()
    events = data.pop("events", [])
    if not isinstance(events, list):
        return jsonify({"error": "events must be a list"}), 400

    config = PlayerConfig.model_validate(data.pop("config", data))
    player = PreviewPlayer(config)

    for event in events:
        kind = event.get("type") if isinstance(event, dict) else None
        if kind == "overlay_click":
            player.click_overlay()
        elif kind == "video_click":
            player.click_video()
        elif kind == "time_update":
            try:
                current_time = float(event.get("currentTime", 0))
                duration = event.get("duration")
                duration = float(duration) if duration is not None else None
            except (TypeError, ValueError):
                return jsonify({"error": f"Invalid time_update event: {event!r}"}), 400
            player.time_update(current_time, duration)
        elif kind == "ended":
            player.finish()
        else:
            return jsonify({"error": f"Unknown event: {event!r}"}), 400

    return jsonify({"status": "success", "state": player.snapshot()})


@app.route("/api/projects", methods=["GET"])
@require_session
def list_projects():
    """List the current user's projects, newest first."""
    projects = PROJECTS.list_by_owner(g.owner, search=request.args.get("q"))
    return jsonify({
        "status": "success",
        "projects": [p.to_api() for p in projects],
        "count": len(projects)
    })


@app.route("/api/projects", methods=["POST"])
@require_session
def create_project():
    config = PlayerConfig.model_validate(_json_body())
    project = PROJECTS.create(g.owner, config)
    return jsonify({"status": "success", "project": project.to_api()}), 201


@app.route("/api/projects/<project_id>", methods=["GET"])
@require_session
def get_project(project_id):
    project = PROJECTS.get(g.owner, project_id)
    return jsonify({"status": "success", "project": project.to_api()})


@app.route("/api/projects/<project_id>", methods=["PUT"])
@require_session
def update_project(project_id):
    config = PlayerConfig.model_validate(_json_body())
    project = PROJECTS.update(g.owner, project_id, config)
    return jsonify({"status": "success", "project": project.to_api()})


@app.route("/api/projects/<project_id>", methods=["DELETE"])
@require_session
def delete_project(project_id):
    PROJECTS.delete(g.owner, project_id)
    return jsonify({"status": "success", "id": project_id})


@app.route("/api/projects/<project_id>/embed", methods=["GET"])
@require_session
def project_embed(project_id):
    """Embed code for a saved project; ?download=1 returns a text file."""
    project = PROJECTS.get(g.owner, project_id)
    locale = request.args.get("locale")
    if locale and locale not in settings.SUPPORTED_LOCALES:
        return jsonify({"error": f"Unsupported locale: {locale}"}), 400

    code = EmbedGenerator(locale=locale).generate(project.config)

    if request.args.get("download") in ("1", "true"):
        return Response(
            code,
            mimetype="text/plain",
            headers={"Content-Disposition": f'attachment; filename="vsl-{project.id}.txt"'}
        )

    return jsonify({"status": "success", "id": project.id, "code": code})


if __name__ == "__main__":
    logger.info(f"{SERVICE_NAME} starting on port {SERVICE_PORT}")
    app.run(host="0.0.0.0", port=SERVICE_PORT, debug=True)
