from __future__ import annotations

import csv
import io
import json
import logging
from functools import wraps

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..common.datetime_utils import format_timestamp
from ..common.validators import require_int, require_non_empty
from ..core.constants import DEFAULT_CALLER_HEADER, DEFAULT_NOTIFICATION_LIMIT
from ..core.exceptions import DomainError, Unauthorized, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    registry = container.registry
    caller_header = app.config.get("CALLER_HEADER") or DEFAULT_CALLER_HEADER

    def caller_required(view):
        """Resolve the caller identity set by the authenticating gateway."""

        @wraps(view)
        def wrapper(*args, **kwargs):
            caller = (request.headers.get(caller_header) or "").strip()
            if not caller:
                return jsonify({
                    "success": False,
                    "error": "Unauthenticated",
                    "message": f"Missing {caller_header} header",
                }), 401
            g.caller = caller
            return view(*args, **kwargs)

        return wrapper

    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    def _not_found(message: str):
        return jsonify({"success": False, "error": "NotFound", "message": message}), 404

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        logger.warning("Rejected %s %s: %s (%s)", request.method, request.path, e.code, e)
        return jsonify({"success": False, "error": e.code, "message": str(e)}), e.http_status

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            # Keep status and headers (e.g. Allow on 405), swap the HTML body for JSON.
            response = e.get_response()
            response.data = json.dumps({
                "success": False,
                "error": e.name.replace(" ", ""),
                "message": e.description,
            })
            response.content_type = "application/json"
            return response
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            message = f"Internal error: {e}"
        else:
            message = "Internal error"
        return jsonify({"success": False, "error": "InternalError", "message": message}), 500

    @app.route("/api/registry", methods=["GET"], endpoint="api_registry")
    def api_registry():
        return jsonify({
            "success": True,
            "admin": registry.admin,
            "event_counter": registry.event_counter,
            "participant_count": registry.participant_count(),
        })

    @app.route("/api/events", methods=["POST"], endpoint="api_create_event")
    @caller_required
    def api_create_event():
        data = _json_body()
        name = data.get("name")
        if not isinstance(name, str):
            raise ValidationError("name must be a string")
        name = require_non_empty(name, "name")
        event_id = registry.create_event(
            caller=g.caller,
            name=name,
            start_time=require_int(data.get("start_time"), "start_time"),
            end_time=require_int(data.get("end_time"), "end_time"),
        )
        return jsonify({"success": True, "event_id": event_id}), 201

    @app.route("/api/events", methods=["GET"], endpoint="api_list_events")
    def api_list_events():
        return jsonify({"success": True, "events": [e.to_dict() for e in registry.list_events()]})

    @app.route("/api/events/<int:event_id>", methods=["GET"], endpoint="api_get_event")
    def api_get_event(event_id: int):
        event = registry.get_event(event_id)
        if event is None:
            return _not_found(f"Event {event_id} does not exist")
        return jsonify({"success": True, "event": event.to_dict()})

    @app.route("/api/participants", methods=["POST"], endpoint="api_register_participant")
    @caller_required
    def api_register_participant():
        data = _json_body()
        identity = data.get("identity")
        if isinstance(identity, str):
            identity = identity.strip()
        registry.register_participant(caller=g.caller, identity=identity)
        return jsonify({"success": True, "identity": identity}), 201

    @app.route("/api/participants/<path:identity>", methods=["GET"], endpoint="api_participant_status")
    def api_participant_status(identity: str):
        return jsonify({"success": True, "identity": identity, "registered": registry.is_registered(identity)})

    @app.route("/api/events/<int:event_id>/attendance", methods=["POST"], endpoint="api_mark_attendance")
    @caller_required
    def api_mark_attendance(event_id: int):
        data = _json_body()
        location = data.get("location", "")
        metadata = data.get("metadata", "")
        if not isinstance(location, str) or not isinstance(metadata, str):
            raise ValidationError("location and metadata must be strings")

        record = registry.mark_attendance(
            caller=g.caller,
            now=container.clock.now(),
            event_id=event_id,
            location=location,
            metadata=metadata,
        )
        return jsonify({"success": True, "attendance": record.to_dict()}), 201

    @app.route("/api/events/<int:event_id>/attendance", methods=["GET"], endpoint="api_list_attendance")
    def api_list_attendance(event_id: int):
        records = registry.list_attendance(event_id)
        return jsonify({"success": True, "event_id": event_id, "attendance": [r.to_dict() for r in records]})

    @app.route("/api/events/<int:event_id>/attendance/<path:identity>", methods=["GET"], endpoint="api_get_attendance")
    def api_get_attendance(event_id: int, identity: str):
        record = registry.get_attendance(event_id, identity)
        if record is None:
            return _not_found(f"No attendance recorded for {identity} at event {event_id}")
        return jsonify({"success": True, "attendance": record.to_dict()})

    @app.route("/api/events/<int:event_id>/attendance.csv", methods=["GET"], endpoint="api_export_attendance_csv")
    @caller_required
    def api_export_attendance_csv(event_id: int):
        if not registry.is_admin(g.caller):
            raise Unauthorized("Only the admin can export attendance")
        event = registry.get_event(event_id)
        if event is None:
            return _not_found(f"Event {event_id} does not exist")

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["event_id", "event_name", "identity", "timestamp", "timestamp_utc", "location", "metadata"],
        )
        writer.writeheader()
        for r in registry.list_attendance(event_id):
            writer.writerow({
                "event_id": r.event_id,
                "event_name": event.name,
                "identity": r.identity,
                "timestamp": r.timestamp,
                "timestamp_utc": format_timestamp(r.timestamp),
                "location": r.location,
                "metadata": r.metadata,
            })

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=event_{event_id}_attendance.csv"},
        )

    @app.route("/api/notifications", methods=["GET"], endpoint="api_notifications")
    def api_notifications():
        after = require_int(request.args.get("after", "0"), "after")
        limit = require_int(request.args.get("limit", str(DEFAULT_NOTIFICATION_LIMIT)), "limit")
        if limit <= 0:
            raise ValidationError("limit must be positive")
        items = registry.notifications(after, limit=limit)
        return jsonify({"success": True, "notifications": [n.to_dict() for n in items]})

    @app.route("/api/whoami", methods=["GET"], endpoint="api_whoami")
    @caller_required
    def api_whoami():
        return jsonify({
            "success": True,
            "identity": g.caller,
            "is_admin": registry.is_admin(g.caller),
            "registered": registry.is_registered(g.caller),
        })
