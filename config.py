import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///highscores.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Shared with the game client; used to sign score submissions
    SCORE_SECRET_KEY = os.environ.get('SCORE_SECRET_KEY') or 'REPLACE_WITH_SECURE_SECRET_KEY'
    # Integrity strategy: any hashlib algorithm, and 'literal' or 'constant_time' comparison
    DIGEST_ALGORITHM = os.environ.get('DIGEST_ALGORITHM', 'sha1')
    DIGEST_COMPARISON = os.environ.get('DIGEST_COMPARISON', 'literal')
    # Zone used both to parse submitted timestamps and to format them for display
    SCORE_TIMEZONE = os.environ.get('SCORE_TIMEZONE', 'UTC')
    # When enabled, identical (initials, score, uniqueid, timestamp) submissions collapse into one row
    COLLAPSE_DUPLICATE_SUBMISSIONS = _env_flag('COLLAPSE_DUPLICATE_SUBMISSIONS', False)
    # Comma separated; entries wrapped in slashes are treated as regexes
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', r'/.*\.itch\.io$/,/.*\.itch\.zone$/')
    AUTO_CREATE_TABLES = _env_flag('AUTO_CREATE_TABLES', True)
    # Log received request bodies
    LOG_PAYLOADS = _env_flag('LOG_PAYLOADS', True)
    # Plain origins only; '*' allows any origin to open the live update socket
    SOCKETIO_CORS_ORIGINS = os.environ.get('SOCKETIO_CORS_ORIGINS', '*')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
