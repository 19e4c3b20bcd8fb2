from __future__ import annotations
from flask import Blueprint, current_app, jsonify

bp = Blueprint("health", __name__)

@bp.get("/health")
def health():
    # lightweight liveness
    return "ok", 200, {"Content-Type": "text/plain; charset=utf-8"}

@bp.get("/ready")
def ready():
    c = getattr(current_app, "container")
    return jsonify({
        "ready": True,
        "students": len(c.students.list_all()),
        "audit_entries": len(c.audit),
    })
