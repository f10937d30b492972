"""
api - REST API layer.

All route modules register on a single Flask Blueprint
with url_prefix config.API_PREFIX (default /api/v1).
"""

from flask import Blueprint

import config

api_bp = Blueprint("api", __name__, url_prefix=config.API_PREFIX)

# Import route modules so their @api_bp decorators execute
from api import auth              # noqa: F401, E402
from api import routes_store      # noqa: F401, E402
from api import routes_import     # noqa: F401, E402
from api import routes_query      # noqa: F401, E402
from api import routes_tables     # noqa: F401, E402
from api import routes_reports    # noqa: F401, E402
from api import errors            # noqa: F401, E402
