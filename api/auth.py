"""
api.auth - Static bearer-token check for every API call.

The expected token is read from the app config key ARTDB_API_TOKEN
(seeded from config.API_TOKEN).  An empty token disables the check.
"""

import hmac

from flask import abort, current_app, request

from api import api_bp


@api_bp.before_request
def require_bearer_token():
    expected = current_app.config.get("ARTDB_API_TOKEN", "")
    if not expected or request.method == "OPTIONS":
        return None

    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    # Compared as bytes: str comparison rejects non-ASCII input with TypeError
    if scheme.lower() != "bearer" or not hmac.compare_digest(
            token.strip().encode(), expected.encode()):
        abort(401)
    return None
