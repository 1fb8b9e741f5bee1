from flask import Blueprint, request, jsonify
from flask_login import current_user, login_user, logout_user, login_required

from extensions import db
from models.user import User
from auth.tokens import issue_token
from schemas.auth import LoginRequest, RegisterRequest
from schemas.user import ProfileUpdate
from services.users import update_user
from utils.logging_config import get_logger

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")

logger = get_logger(__name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    payload = RegisterRequest.model_validate(request.get_json(silent=True) or {})

    # check if user already exists
    existing = User.query.filter_by(email=payload.email).first()
    if existing:
        return jsonify({"success": False, "error": "Email already exists."}), 400

    if payload.roll_number and User.query.filter_by(roll_number=payload.roll_number).first():
        return jsonify({"success": False, "error": "Roll number already exists."}), 400

    # self-registration only ever creates students
    user = User(
        name=payload.name,
        email=payload.email,
        role="student",
        roll_number=payload.roll_number,
        department=payload.department,
        semester=payload.semester,
        section=payload.section,
    )
    user.set_password(payload.password)

    db.session.add(user)
    db.session.commit()
    logger.info("student registered id=%s", user.id)

    return jsonify({
        "success": True,
        "message": "Account created! You can now log in.",
        "token": issue_token(user),
        "user": user.to_dict(),
    }), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    payload = LoginRequest.model_validate(request.get_json(silent=True) or {})

    user = User.query.filter_by(email=payload.email).first()

    if user and user.check_password(payload.password):
        login_user(user)
        return jsonify({
            "success": True,
            "token": issue_token(user),
            "user": user.to_dict(),
        })

    logger.info("failed login for %s", payload.email)
    return jsonify({"success": False, "error": "Invalid email or password."}), 401


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"success": True, "message": "Logged out."})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify({"success": True, "user": current_user.to_dict()})


@auth_bp.route("/profile", methods=["PUT"])
@login_required
def profile():
    payload = ProfileUpdate.model_validate(request.get_json(silent=True) or {})
    user = update_user(current_user._get_current_object(), payload.model_dump(exclude_unset=True))
    return jsonify({"success": True, "message": "Profile updated successfully", "user": user.to_dict()})
