import os
from dotenv import load_dotenv
from datetime import timedelta

# Load environment variables
load_dotenv()


def _env_flag(name, default='0'):
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    # Basic Flask configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'your_secret_key')  # Change this in production

    # Development server (run.py)
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '5000'))
    DEBUG = _env_flag('FLASK_DEBUG')

    # Session configuration
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)
    SESSION_COOKIE_SECURE = _env_flag('SESSION_COOKIE_SECURE')  # Set to True only in production with HTTPS
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # RBAC policy configuration
    # Path to a JSON policy file. When unset the built-in school ERP policy is used.
    # Format: {"roles": {"teacher": {"description": "...", "modules": {"students": ["view", "edit"]}}}}
    RBAC_POLICY_FILE = os.getenv('RBAC_POLICY_FILE') or None

    # Allow POST /auth/switch_role to change the session role (local demos only)
    DEMO_ROLE_SWITCH = _env_flag('DEMO_ROLE_SWITCH')

    # Show the "Debug: Current Permissions" card on the dashboard
    SHOW_PERMISSION_DEBUG = _env_flag('SHOW_PERMISSION_DEBUG')

    # Frontend origins allowed to call /api/*
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            'CORS_ORIGINS',
            'http://localhost:3000,http://localhost:8080,http://127.0.0.1:3000,http://127.0.0.1:8080'
        ).split(',')
        if origin.strip()
    ]

    # Directory for rotating log files, console only when unset
    LOG_DIR = os.getenv('LOG_DIR') or None


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    RBAC_POLICY_FILE = None
    DEMO_ROLE_SWITCH = True
    SHOW_PERMISSION_DEBUG = True
    LOG_DIR = None
