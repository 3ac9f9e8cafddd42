import logging
import sys
from typing import Optional

from flask import Flask, jsonify, request
from flask_socketio import SocketIO
from werkzeug.exceptions import HTTPException

from qa_config import Settings
from qa_demo import seed_demo
from qa_errors import AskLawError
from qa_store import QuestionStore


def configure_logging(app: Flask, loglevel_name: str) -> None:
    """Send debug messages to the same place both in dev and under gunicorn."""
    loglevel = getattr(logging, loglevel_name.upper(), logging.DEBUG)

    # If running under Gunicorn, reuse its error handlers so logs go to the same place
    gunicorn_logger = logging.getLogger('gunicorn.error')
    if getattr(gunicorn_logger, 'handlers', None):
        handlers = gunicorn_logger.handlers
        for h in handlers:
            h.setLevel(loglevel)
        app.logger.handlers = handlers
        app.logger.setLevel(loglevel)
        app.logger.propagate = False
        root = logging.getLogger()
        root.handlers = handlers
        root.setLevel(loglevel)
        return

    # Standalone: ensure there's a StreamHandler to stdout
    root = logging.getLogger()
    root.setLevel(loglevel)
    found = False
    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, 'stream', None) in (sys.stdout, sys.stderr, None):
            found = True
            h.setLevel(loglevel)
            break
    if not found:
        sh = logging.StreamHandler(sys.stdout)
        sh.setLevel(loglevel)
        sh.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s: %(message)s'))
        root.addHandler(sh)
    app.logger.setLevel(loglevel)
    app.logger.propagate = True
    logging.getLogger('werkzeug').setLevel(loglevel)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def create_app(settings: Optional[Settings] = None, store: Optional[QuestionStore] = None) -> Flask:
    """Build the app and its Socket.IO server.

    A store passed in is reconfigured from ``settings`` and wired to this
    app's Socket.IO server.
    """
    settings = settings or Settings.from_env()
    app = Flask(__name__)
    configure_logging(app, settings.loglevel)

    if store is None:
        store = QuestionStore()
    store.strict_votes = settings.strict_votes
    socketio = SocketIO(app, cors_allowed_origins="*", ping_interval=settings.heartbeat_seconds,
                        logger=False, engineio_logger=False)
    store.broadcaster.attach(socketio)
    app.extensions["qa_store"] = store
    app.config["QA_SETTINGS"] = settings

    if settings.seed_demo:
        seeded = seed_demo(store)
        app.logger.info("Seeded %d demo questions", len(seeded))

    @app.errorhandler(AskLawError)
    def handle_store_error(err: AskLawError):
        app.logger.debug("%s %s -> %d %s", request.method, request.path, err.status_code, err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err: HTTPException):
        return jsonify({"error": err.name}), err.code

    @app.route("/api/questions", methods=["POST"])
    def api_create_question():
        data = _json_body()
        q = store.create_question(
            data.get("title"),
            data.get("description"),
            data.get("category"),
            data.get("createdBy"),
        )
        return jsonify(q)

    @app.route("/api/questions", methods=["GET"])
    def api_list_questions():
        q = (request.args.get("q") or "").strip()
        return jsonify(store.list_questions(q or None))

    @app.route("/api/questions/<question_id>", methods=["GET"])
    def api_get_question(question_id):
        return jsonify(store.get_question(question_id))

    @app.route("/api/answers/<question_id>", methods=["POST"])
    def api_create_answer(question_id):
        data = _json_body()
        a = store.create_answer(question_id, data.get("text"), data.get("createdBy"))
        return jsonify(a)

    @app.route("/api/vote/<answer_id>", methods=["POST"])
    def api_vote(answer_id):
        votes = store.apply_vote(answer_id, _json_body().get("delta"))
        return jsonify({"answerId": answer_id, "votes": votes})

    @socketio.on("connect")
    def on_connect(auth=None):
        store.broadcaster.connected(request.sid)

    @socketio.on("disconnect")
    def on_disconnect(reason=None):
        store.broadcaster.disconnected(request.sid)

    @app.route("/api/health")
    def api_health():
        return jsonify({"status": "ok", **store.stats()})

    return app


app = create_app()
socketio = app.extensions["socketio"]


if __name__ == "__main__":
    settings = app.config["QA_SETTINGS"]
    app.logger.info("AskLaw server running on http://%s:%d", settings.host, settings.port)
    socketio.run(app, host=settings.host, port=settings.port, allow_unsafe_werkzeug=True)
