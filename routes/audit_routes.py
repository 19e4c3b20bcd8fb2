from __future__ import annotations
from flask import Blueprint, jsonify

from routes import get_container

bp = Blueprint("audit", __name__, url_prefix="/api")


@bp.get("/audit")
def list_audit():
    c = get_container()
    return jsonify({"audit": [e.to_dict() for e in c.audit.list_all()]})
