import os

from dotenv import dotenv_values, find_dotenv

# a local .env fills in defaults; the process environment is never modified and wins over it
env = {k: v for k, v in dotenv_values(find_dotenv(usecwd=True)).items() if v is not None}
env.update(os.environ)

LOG_NAME = env.get('LOG_NAME', 'scrollback')
LOG_FILE = env.get('LOG_FILE', '')
LOG_LEVEL = env.get('LOG_LEVEL', 'INFO')
LOG_MAX_BYTES = int(env.get('LOG_MAX_BYTES', 10 * 1024 * 1024))
LOG_BACKUP_COUNT = int(env.get('LOG_BACKUP_COUNT', 3))

# default history size for RingStore(), rounded up to a power of two there
HISTORY_MIN_CAPACITY = int(env.get('HISTORY_MIN_CAPACITY', 64 * 1024))
