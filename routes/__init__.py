from flask import Blueprint, jsonify

# single main blueprint for everything except auth (has its own)
main_bp = Blueprint("main", __name__, url_prefix="/api")


@main_bp.route("/health")
def health():
    return jsonify({"status": "OK", "message": "Server is running"})


#  import route modules (registered on main_bp, hence the # noqa: F401)
from . import electives  # noqa: F401,E402
from . import selections  # noqa: F401,E402
from . import limits  # noqa: F401,E402
from . import feedback  # noqa: F401,E402
from . import users  # noqa: F401,E402
from . import system_config  # noqa: F401,E402
