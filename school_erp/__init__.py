# school_erp/__init__.py
from flask import Flask
from flask_cors import CORS
import logging

from school_erp.config import Config
from school_erp.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config_class)

    setup_logger('school_erp', log_dir=app.config.get('LOG_DIR'))

    # Configure CORS for the permissions API used by the frontend
    CORS(app,
         resources={
             r"/api/*": {
                 "origins": app.config['CORS_ORIGINS'],
                 "methods": ["GET", "OPTIONS"],
                 "allow_headers": ["Content-Type", "Authorization", "X-Requested-With"],
                 "supports_credentials": True
             }
         },
         supports_credentials=True)

    # Load the RBAC policy once; a bad policy file stops the app from starting
    from school_erp.rbac.permissions import DEFAULT_POLICY
    from school_erp.rbac.policy import load_policy

    policy_file = app.config.get('RBAC_POLICY_FILE')
    if policy_file:
        app.extensions['rbac'] = load_policy(policy_file)
    else:
        app.extensions['rbac'] = DEFAULT_POLICY
        logger.info("Using built-in RBAC policy")

    # Register blueprints (import here to avoid circular imports)
    from school_erp.routes.auth import bp as auth_bp
    from school_erp.routes.dashboard import bp as dashboard_bp
    from school_erp.routes.permissions_api import bp as permissions_bp

    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(permissions_bp, url_prefix='/api/permissions')

    # Register RBAC template helpers
    from school_erp.rbac.template_helpers import TEMPLATE_HELPERS
    for name, func in TEMPLATE_HELPERS.items():
        app.jinja_env.globals[name] = func

    return app
