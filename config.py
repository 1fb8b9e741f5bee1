import os


# Absolute path to project root
# (a stable anchor for all file paths)
basedir = os.path.abspath(os.path.dirname(__file__))

# Runtime only directory (DB, secrets)
instance_dir = os.path.join(basedir, "instance")


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", "sqlite:///" + os.path.join(instance_dir, "app.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bearer tokens issued by /api/auth/login stay valid for this many seconds
    AUTH_TOKEN_MAX_AGE = int(os.environ.get("AUTH_TOKEN_MAX_AGE", "7200"))

    # Used when no CategoryLimit row exists for (department, semester, category)
    DEFAULT_CATEGORY_LIMIT = 1

    MIN_SEMESTER = 1
    MAX_SEMESTER = 8

    # Seed values for the system configuration row, used until an admin edits it
    DEFAULT_DEPARTMENTS = ["Artificial Intelligence", "Computer Science", "Information Technology"]
    DEFAULT_SECTIONS = ["A", "B", "C"]
    DEFAULT_ELECTIVE_CATEGORIES = ["Departmental", "Open", "Humanities"]

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
