from pathlib import Path

import dj_database_url
import environ

env = environ.Env()
environ.Env.read_env()

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = env('SECRET_KEY', default='your-secret-key-change-in-production')

DEBUG = env.bool('DEBUG', default=True)

ALLOWED_HOSTS = env.list('ALLOWED_HOSTS', default=['localhost', '127.0.0.1', '0.0.0.0', 'backend'])

# Application definition
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'aischedule',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'harmoni_project.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'harmoni_project.wsgi.application'

# Database (default is SQLite, DATABASE_URL switches to MySQL/PostgreSQL)
DATABASES = {
    'default': dj_database_url.config(
        default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}",
        conn_max_age=env.int('DB_CONN_MAX_AGE', default=0),
    )
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Progress of running schedule generations is published through the cache
CACHES = {
    'default': env.cache('CACHE_URL', default='locmemcache://aischedule'),
}

# Password validation (use default validators)
AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]

# Internationalization
LANGUAGE_CODE = 'en-us'
TIME_ZONE = env('TIME_ZONE', default='Europe/Warsaw')
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'static'

# Genetic schedule generation
AI_SCHEDULE = {
    'POPULATION_SIZE': env.int('AI_SCHEDULE_POPULATION_SIZE', default=50),
    'TOURNAMENT_SIZE': env.int('AI_SCHEDULE_TOURNAMENT_SIZE', default=10),
    'MAX_GENERATIONS': env.int('AI_SCHEDULE_MAX_GENERATIONS', default=1000),
    'MUTATION_RATE': env.float('AI_SCHEDULE_MUTATION_RATE', default=0.02),
    'CROSSOVER_RATE': env.float('AI_SCHEDULE_CROSSOVER_RATE', default=0.7),
    'REPORT_INTERVAL': env.int('AI_SCHEDULE_REPORT_INTERVAL', default=100),
    'FITNESS_THRESHOLD': env.float('AI_SCHEDULE_FITNESS_THRESHOLD', default=0.9),
    'PROGRESS_TIMEOUT': env.int('AI_SCHEDULE_PROGRESS_TIMEOUT', default=300),
}

LOG_LEVEL = env('LOG_LEVEL', default='INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'aischedule': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
        'genetic_scheduling': {
            'handlers': ['console'],
            'level': LOG_LEVEL,
            'propagate': False,
        },
    },
}

# Security settings for production
if not DEBUG:
    SECURE_BROWSER_XSS_FILTER = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
