# app/config.py
import os
from dotenv import load_dotenv
load_dotenv()

class Settings:

    def __init__(self):
        self.BACKEND_HOST = os.getenv('BACKEND_HOST', '0.0.0.0')
        self.BACKEND_PORT = int(os.getenv('BACKEND_PORT', '8000'))

        self.DB_PATH = os.getenv('DATABASE_PATH', 'call_queue.db')
        self.DB_TIMEOUT_SECONDS = float(os.getenv('DB_TIMEOUT_SECONDS', '5'))

        self.JWT_SECRET = os.getenv('JWT_SECRET')
        self.ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv('ACCESS_TOKEN_EXPIRE_MINUTES', '120'))
        self.ADMIN_USERNAME = os.getenv('ADMIN_USERNAME')
        self.ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

        self.CLAIM_MAX_ATTEMPTS = int(os.getenv('CLAIM_MAX_ATTEMPTS', '5'))
        # 0 disables lease expiry; claims then stay until reclaimed or released by an admin
        self.CLAIM_LEASE_SECONDS = int(os.getenv('CLAIM_LEASE_SECONDS', '0'))
        self.STALE_CLAIM_SWEEP_SECONDS = float(os.getenv('STALE_CLAIM_SWEEP_SECONDS', '60'))

        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

        self._validate()

    def _validate(self):
        if not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET is not set in environment variables")

        if self.CLAIM_MAX_ATTEMPTS < 1:
            raise RuntimeError("CLAIM_MAX_ATTEMPTS must be at least 1")


settings = Settings()
