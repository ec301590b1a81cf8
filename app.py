import os
from flask_cors import CORS
from flask_talisman import Talisman
from flask import Flask
from dotenv import load_dotenv
import logging
import sys

from common.utils.database import connect_mongo
from common.utils.logging_service import log_request, start_request_timer
from common.utils.utils import MongoJSONProvider
from security.auth0_service import Auth0Service
from security.guards import IDENTITY_SERVICE_EXTENSION
from security.route_policy import DEFAULT_PROFILE, resolve_policies
from routes import register_routes
import exceptions_views

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],  # Log to stdout
)

logger = logging.getLogger(__name__)


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def create_app(test_config=None, collections=None, identity_service=None):
    """
    Builds the Flask app.

    The database connection is confirmed before any route is registered, so
    a failed ping stops startup instead of serving a half working app.
    `collections` and `identity_service` can be injected by tests.
    """
    load_dotenv()

    app = Flask(__name__, instance_relative_config=True)
    app.json = MongoJSONProvider(app)

    app.config.update(
        MONGO_URL=os.getenv("MONGO_URL") or os.getenv("MONGODB_URI"),
        MONGO_DB_NAME=os.getenv("MONGO_DB_NAME", "Movie-Master-Pro"),
        MOVIES_COLLECTION=os.getenv("MOVIES_COLLECTION", "All Movies"),
        WATCH_LIST_COLLECTION=os.getenv("WATCH_LIST_COLLECTION", "myWatchList"),
        AUTH0_AUDIENCE=os.getenv("AUTH0_AUDIENCE"),
        AUTH0_DOMAIN=os.getenv("AUTH0_DOMAIN"),
        AUTH_EMAIL_CLAIM=os.getenv("AUTH_EMAIL_CLAIM", "email"),
        AUTH_POLICY_PROFILE=os.getenv("AUTH_POLICY_PROFILE", DEFAULT_PROFILE),
        ENFORCE_COLLECTION_OWNER=_env_flag("ENFORCE_COLLECTION_OWNER", True),
        ORIGINS=os.getenv("ORIGINS", "*"),
        FORCE_HTTPS=_env_flag("FORCE_HTTPS", True),
    )

    if test_config is not None:
        app.config.update(test_config)

    policies = resolve_policies(
        app.config["AUTH_POLICY_PROFILE"], app.config["ENFORCE_COLLECTION_OWNER"]
    )
    logger.info(
        f"Auth policy profile '{app.config['AUTH_POLICY_PROFILE']}': "
        + ", ".join(f"{k}={v.value}" for k, v in sorted(policies.items()))
    )

    if identity_service is None:
        for key in ("AUTH0_DOMAIN", "AUTH0_AUDIENCE"):
            if not app.config[key]:
                raise RuntimeError(f"{key} is not configured")
        identity_service = Auth0Service(
            app.config["AUTH0_DOMAIN"], app.config["AUTH0_AUDIENCE"]
        )
    app.extensions[IDENTITY_SERVICE_EXTENSION] = identity_service

    if collections is None:
        collections = connect_mongo(
            app.config["MONGO_URL"],
            app.config["MONGO_DB_NAME"],
            app.config["MOVIES_COLLECTION"],
            app.config["WATCH_LIST_COLLECTION"],
        )

    csp = {"default-src": ["'self'"], "frame-ancestors": ["'none'"]}
    Talisman(
        app,
        force_https=app.config["FORCE_HTTPS"],
        frame_options="DENY",
        content_security_policy=csp,
        referrer_policy="no-referrer",
        x_xss_protection=True,
        x_content_type_options=True,
        strict_transport_security=True,
    )

    app.before_request(start_request_timer)
    app.after_request(log_request)

    @app.after_request
    def add_no_cache(response):
        response.headers["Cache-Control"] = "no-store, max-age=0, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response

    CORS(app, origins=[o.strip() for o in app.config["ORIGINS"].split(",")])

    register_routes(app, collections, policies)
    app.register_blueprint(exceptions_views.bp)

    app.logger.handlers = logging.getLogger().handlers
    app.logger.setLevel(logging.DEBUG)

    return app


if __name__ == "__main__":
    create_app().run(port=int(os.getenv("PORT", "5000")), debug=True)
