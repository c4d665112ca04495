import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'
    API_BASE_URL = os.environ.get('API_BASE_URL', 'http://localhost:8000/api')
    API_TIMEOUT = int(os.environ.get('API_TIMEOUT', 10))
    WTF_CSRF_ENABLED = True
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max file size
