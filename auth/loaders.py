from flask import jsonify

from extensions import db, login_manager
from models.user import User
from auth.tokens import read_token


@login_manager.user_loader
def load_user(user_id: str):
    return db.session.get(User, int(user_id))


@login_manager.request_loader
def load_user_from_request(request):
    # Authorization: Bearer <token>
    header = request.headers.get("Authorization", "")
    if not header.startswith("Bearer "):
        return None
    user_id = read_token(header[len("Bearer "):].strip())
    if user_id is None:
        return None
    return db.session.get(User, user_id)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({"success": False, "error": "Access denied. Authentication required."}), 401
