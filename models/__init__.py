# Import every model so db.create_all() sees the full schema
from models.user import User  # noqa: F401
from models.prerequisite import elective_prerequisite  # noqa: F401
from models.elective import Elective  # noqa: F401
from models.selection import Selection  # noqa: F401
from models.category_limit import CategoryLimit  # noqa: F401
from models.feedback import ElectiveFeedback  # noqa: F401
from models.system_config import SystemConfig  # noqa: F401
