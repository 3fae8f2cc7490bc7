import os
from typing import List
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'MEDICATION REMINDER')
    SECRET_KEY: str = os.getenv('SECRET_KEY', '')
    API_PREFIX: str = '/api'
    BACKEND_CORS_ORIGINS: List[str] = ['*']
    DATABASE_URL: str = os.getenv('SQL_DATABASE_URL', '')
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 60 * 60 * 24 * 7  # Token expired after 7 days
    SECURITY_ALGORITHM: str = 'HS256'
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')
    UPLOAD_DIR: str = os.path.join(BASE_DIR, 'static', 'uploads')

    # Sessions are computed in a single operating timezone
    TIMEZONE: str = os.getenv('TIMEZONE', 'Asia/Jakarta')
    BEFORE_MISSED_MINUTES: int = int(os.getenv('BEFORE_MISSED_MINUTES', '60'))
    AFTER_SCHEDULED_MINUTES: int = int(os.getenv('AFTER_SCHEDULED_MINUTES', '30'))

    # Push delivery (FCM legacy HTTP API)
    FCM_SERVER_KEY: str = os.getenv('FCM_SERVER_KEY', '')
    FCM_URL: str = os.getenv('FCM_URL', 'https://fcm.googleapis.com/fcm/send')
    PUSH_TIMEOUT_SECONDS: int = int(os.getenv('PUSH_TIMEOUT_SECONDS', '10'))

    # Reminder polling
    REMINDER_POLLER_ENABLED: bool = os.getenv('REMINDER_POLLER_ENABLED', 'false').lower() == 'true'
    REMINDER_POLL_SECONDS: int = int(os.getenv('REMINDER_POLL_SECONDS', '60'))
    SCHEDULER_API_KEY: str = os.getenv('SCHEDULER_API_KEY', '')


settings = Settings()
