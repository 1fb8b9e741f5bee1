from flask import request, jsonify
from flask_login import login_required

from . import main_bp
from auth.decorators import admin_required
from schemas.system_config import SystemConfigUpdate
from services.system_config import get_system_config, update_system_config


@main_bp.route("/system-config")
@login_required
def system_config_show():
    return jsonify({"success": True, "config": get_system_config().to_dict()})


@main_bp.route("/system-config", methods=["PUT"])
@admin_required
def system_config_update():
    payload = SystemConfigUpdate.model_validate(request.get_json(silent=True) or {})
    row = update_system_config(payload.model_dump(exclude_unset=True))
    return jsonify({
        "success": True,
        "message": "System configuration updated successfully",
        "config": row.to_dict(),
    })
