from extensions import db


# Elective X requires elective Y to be completed before it can be selected
elective_prerequisite = db.Table(
    "elective_prerequisite",
    db.Column(
        "elective_id",
        db.Integer,
        db.ForeignKey("elective.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    db.Column(
        "prereq_elective_id",
        db.Integer,
        db.ForeignKey("elective.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)
