from __future__ import annotations

from flask import current_app

from extensions import db
from models.system_config import MAIN_KEY, SystemConfig
from utils.logging_config import get_logger
from utils.semesters import semester_bounds

logger = get_logger(__name__)


def get_system_config() -> SystemConfig:
    """Return the single configuration row, creating it from app defaults on first use."""
    row = SystemConfig.query.filter_by(key=MAIN_KEY).first()
    if row is not None:
        return row

    low, high = semester_bounds()
    row = SystemConfig(
        key=MAIN_KEY,
        departments=list(current_app.config.get("DEFAULT_DEPARTMENTS", [])),
        sections=list(current_app.config.get("DEFAULT_SECTIONS", [])),
        semesters=list(range(low, high + 1)),
        elective_categories=list(current_app.config.get("DEFAULT_ELECTIVE_CATEGORIES", [])),
    )
    db.session.add(row)
    db.session.commit()
    logger.info("system config created with defaults")
    return row


def update_system_config(changes: dict) -> SystemConfig:
    row = get_system_config()
    for key, value in changes.items():
        if value is not None:
            # reassign, JSON columns don't track in-place mutation
            setattr(row, key, list(value))
    db.session.commit()
    logger.info("system config updated fields=%s", sorted(k for k, v in changes.items() if v is not None))
    return row
