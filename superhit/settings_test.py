from .settings import *  # noqa: F401,F403

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

TIME_ZONE = 'UTC'
BCRYPT_ROUNDS = 4

SUGGESTION_API_URL = 'https://llm.test/v1/chat/completions'
SUGGESTION_API_KEY = 'test-key'
SUGGESTION_MODEL = 'test-model'
SUGGESTION_TIMEOUT = 5
