from pathlib import Path
import os
from dotenv import load_dotenv
from apps.common.config import build_redis_url, get_env_bool, get_env_int, get_env_list, get_env_str

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from .env file
load_dotenv(BASE_DIR / '.env')


# Runtime environment: 'development' or 'production'
APP_ENV = get_env_str('APP_ENV', 'development')
IS_DEVELOPMENT = APP_ENV != 'production'

# Port used by `manage.py runserver` when none is given
PORT = get_env_int('PORT', 5000)

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    'DJANGO_SECRET_KEY',
    'django-insecure-form-intake-development-key-change-me'  # Fallback for development only
)

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = get_env_bool('DJANGO_DEBUG', IS_DEVELOPMENT)

# ALLOWED_HOSTS: set via DJANGO_ALLOWED_HOSTS in production (comma-separated).
ALLOWED_HOSTS = get_env_list('DJANGO_ALLOWED_HOSTS', '*')

# CORS Configuration - should be restricted in production
CORS_ALLOW_ALL_ORIGINS = get_env_bool('CORS_ALLOW_ALL_ORIGINS', True)

# CORS allowed origins (used when CORS_ALLOW_ALL_ORIGINS is False)
CORS_ALLOWED_ORIGINS = get_env_list('CORS_ALLOWED_ORIGINS', 'http://localhost:3000')

# Application definition

INSTALLED_APPS = [
    "rest_framework",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    # Before staticfiles so its runserver (default PORT) wins
    "apps.common",
    "django.contrib.staticfiles",
    "corsheaders",
    "apps.intake",
    "apps.notifications",
    "apps.health",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "app_logging.middleware.StructlogRequestContextMiddleware",  # Bind request context to structlog
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "formintake.urls"

# The API has no trailing slashes; never redirect POSTs
APPEND_SLASH = False

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "formintake.wsgi.application"
ASGI_APPLICATION = "formintake.asgi.application"


# Database
# Supports both SQLite (development) and PostgreSQL (production)

DB_ENGINE = os.environ.get('DB_ENGINE', 'sqlite3')

if DB_ENGINE == 'postgresql':
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": os.environ.get('DB_NAME', 'formintake'),
            "USER": os.environ.get('DB_USER', 'postgres'),
            "PASSWORD": os.environ.get('DB_PASSWORD', ''),
            "HOST": os.environ.get('DB_HOST', 'localhost'),
            "PORT": os.environ.get('DB_PORT', '5432'),
            "OPTIONS": {
                "connect_timeout": 10,
            },
        }
    }
else:
    # Default to SQLite for development
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "db.sqlite3",
        }
    }


AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.CommonPasswordValidator",
    },
    {
        "NAME": "django.contrib.auth.password_validation.NumericPasswordValidator",
    },
]


LANGUAGE_CODE = "en-us"

TIME_ZONE = "UTC"

USE_I18N = True

USE_TZ = True


STATIC_URL = "static/"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"


# Security headers
X_FRAME_OPTIONS = 'DENY'
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = 'strict-origin-when-cross-origin'
SECURE_CROSS_ORIGIN_OPENER_POLICY = 'same-origin'


# Email Configuration
# SendGrid is used when SENDGRID_API_KEY is set, otherwise the SMTP relay below
SENDGRID_API_KEY = get_env_str('SENDGRID_API_KEY')
EMAIL_FROM = get_env_str('EMAIL_FROM', get_env_str('EMAIL_USER'))
EMAIL_FROM_NAME = get_env_str('EMAIL_FROM_NAME', 'Cernol Chemicals')
ADMIN_EMAIL = get_env_str('ADMIN_EMAIL')
ADMIN_PANEL_URL = get_env_str('ADMIN_PANEL_URL')

EMAIL_BACKEND = get_env_str('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = get_env_str('EMAIL_HOST')
EMAIL_PORT = get_env_int('EMAIL_PORT', 587)
EMAIL_HOST_USER = get_env_str('EMAIL_USER')
EMAIL_HOST_PASSWORD = get_env_str('EMAIL_PASS')
EMAIL_USE_TLS = get_env_bool('EMAIL_USE_TLS', True)
EMAIL_TIMEOUT = get_env_int('EMAIL_TIMEOUT', 10)
DEFAULT_FROM_EMAIL = EMAIL_FROM or 'webmaster@localhost'


# Background notifications
# Thread pool by default; Celery when EMAIL_QUEUE_ENABLED is on
EMAIL_QUEUE_ENABLED = get_env_bool('EMAIL_QUEUE_ENABLED', False)
NOTIFICATION_WORKERS = get_env_int('NOTIFICATION_WORKERS', 4)

# Celery Configuration
REDIS_HOST = get_env_str('REDIS_HOST', 'localhost')
REDIS_PORT = get_env_int('REDIS_PORT', 6379)
REDIS_PASSWORD = get_env_str('REDIS_PASSWORD') or None

CELERY_BROKER_URL = get_env_str('CELERY_BROKER_URL', build_redis_url(REDIS_HOST, REDIS_PORT, REDIS_PASSWORD))
CELERY_RESULT_BACKEND = get_env_str('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_ACKS_LATE = True
CELERY_RESULT_EXPIRES = 60 * 60 * 24
# Publishing must fail fast so the thread-pool fallback takes over
CELERY_TASK_PUBLISH_RETRY = False
CELERY_BROKER_CONNECTION_TIMEOUT = get_env_int('CELERY_BROKER_CONNECTION_TIMEOUT', 2)


# REST Framework Configuration
REST_FRAMEWORK = {
    # Public forms: no authentication, no permission checks
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
        'rest_framework.parsers.FormParser',
    ],
    'UNAUTHENTICATED_USER': None,
    # Custom exception handler for consistent error responses
    'EXCEPTION_HANDLER': 'apps.common.exception_handler.custom_exception_handler',
}

# Logging Configuration
from app_logging.config import setup_logging
LOGGING = setup_logging(BASE_DIR, console_level=get_env_str('LOG_LEVEL', 'INFO'))
