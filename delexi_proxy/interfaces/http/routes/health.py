from __future__ import annotations

from flask import Blueprint, jsonify

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/health")
def health():
    return jsonify({"ok": True}), 200
