import os

from flask import Flask

from config import Config
from extensions import db, login_manager
from utils.logging_config import setup_logging


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app)

    # SQLite file lives under instance/
    os.makedirs(app.instance_path, exist_ok=True)

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)

    # user/token loaders register themselves on login_manager
    import auth.loaders  # noqa: F401

    # import and register blueprints
    from auth.routes import auth_bp
    from routes import main_bp
    from routes.errors import register_error_handlers

    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    register_error_handlers(app)

    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=True)
