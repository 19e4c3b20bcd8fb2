from __future__ import annotations
from flask import Blueprint, jsonify, request

from routes import current_actor, get_container, json_body
from service.errors import NotFoundError
from service.models import Student
from service.security import ensure_teacher

bp = Blueprint("students", __name__, url_prefix="/api/students")


@bp.get("")
def list_students():
    c = get_container()
    return jsonify({"students": [s.to_dict() for s in c.students.list_all()]})


@bp.get("/<first>/<last>")
def find_student(first: str, last: str):
    c = get_container()
    student = c.students.find_by_name(first, last)
    if student is None:
        raise NotFoundError(f"Student not found: {first} {last}")
    return jsonify(student.to_dict())


@bp.post("")
def add_student():
    c = get_container()
    actor = current_actor()
    ensure_teacher(actor, "add students")
    payload = json_body("student.schema.json")
    student = c.students.add(
        actor,
        Student(payload["firstName"], payload["lastName"], payload.get("tokens", 0)),
    )
    return jsonify(student.to_dict()), 201


@bp.delete("/<first>/<last>")
def remove_student(first: str, last: str):
    c = get_container()
    actor = current_actor()
    if request.args.get("expel", "").lower() in {"1", "true", "yes"}:
        c.students.expel(actor, first, last)
    else:
        c.students.remove(first, last, actor)
    return "", 204


@bp.post("/<first>/<last>/tokens")
def adjust_tokens(first: str, last: str):
    c = get_container()
    actor = current_actor()
    ensure_teacher(actor, "update tokens")
    payload = json_body("token_adjustment.schema.json")
    student = c.students.adjust_tokens(first, last, payload["delta"], actor)
    return jsonify(student.to_dict())
