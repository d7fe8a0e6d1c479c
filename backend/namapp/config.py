"""
namapp/config.py - Application configuration and Firebase initialization.

This module defines a Pydantic BaseSettings class to load configuration from environment,
and an explicit `init_firebase` step that builds the Admin SDK app from the provided
credentials. Nothing connects at import time: the app factory calls `init_firebase`
once at startup and hands the resulting clients to the request handlers.
"""
from functools import lru_cache
from typing import Optional

import firebase_admin
from firebase_admin import credentials
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    firebase_cred_file: str = Field('firebase_service_account.json')
    firebase_project_id: str = Field('')

    # Firebase credentials from environment variables (for Cloud Run)
    firebase_private_key_id: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_client_id: Optional[str] = None
    firebase_auth_uri: Optional[str] = None
    firebase_token_uri: Optional[str] = None
    firebase_auth_provider_x509_cert_url: Optional[str] = None
    firebase_client_x509_cert_url: Optional[str] = None

    debug: bool = False
    allowed_origins: str = Field('*')  # Comma-separated list or '*' for all
    log_level: str = Field('INFO')

    # SMS gateway (Twilio)
    twilio_account_sid: str = ''
    twilio_auth_token: str = ''
    twilio_from_number: str = ''
    twilio_messaging_service_sid: str = ''
    twilio_api_base: str = 'https://api.twilio.com/2010-04-01'
    sms_timeout: float = 10.0

    model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')

    @field_validator(
        'twilio_account_sid',
        'twilio_auth_token',
        'twilio_from_number',
        'twilio_messaging_service_sid',
        mode='before',
    )
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('log_level')
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}:
            raise ValueError(f"Invalid LOG_LEVEL '{v}'")
        return level

    @property
    def origins(self) -> list:
        if not self.allowed_origins:
            return ['*']
        return [origin.strip() for origin in self.allowed_origins.split(',')]

    def firebase_credential_dict(self) -> Optional[dict]:
        """Service account dict built from FIREBASE_* variables, or None if any is missing."""
        if not all([
            self.firebase_private_key_id,
            self.firebase_private_key,
            self.firebase_client_email,
            self.firebase_client_id,
            self.firebase_auth_uri,
            self.firebase_token_uri,
            self.firebase_auth_provider_x509_cert_url,
            self.firebase_client_x509_cert_url,
        ]):
            return None
        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "private_key_id": self.firebase_private_key_id,
            # Cloud Run secrets usually carry the key with literal "\n" sequences
            "private_key": self.firebase_private_key.replace('\\n', '\n'),
            "client_email": self.firebase_client_email,
            "client_id": self.firebase_client_id,
            "auth_uri": self.firebase_auth_uri,
            "token_uri": self.firebase_token_uri,
            "auth_provider_x509_cert_url": self.firebase_auth_provider_x509_cert_url,
            "client_x509_cert_url": self.firebase_client_x509_cert_url,
        }


@lru_cache
def get_settings() -> Settings:
    """Load settings from environment (.env file, etc.) once per process."""
    return Settings()


def init_firebase(settings: Settings) -> firebase_admin.App:
    """
    Initialize the Firebase Admin SDK with service-account credentials.

    Uses the FIREBASE_* variables when all of them are set (Cloud Run),
    otherwise the service account file (local development). If the default
    app already exists it is reused.
    """
    cred_dict = settings.firebase_credential_dict()
    if cred_dict is not None:
        cred = credentials.Certificate(cred_dict)
    else:
        cred = credentials.Certificate(settings.firebase_cred_file)

    options = {'projectId': settings.firebase_project_id} if settings.firebase_project_id else None
    try:
        return firebase_admin.initialize_app(cred, options)
    except ValueError as e:
        if "already exists" in str(e):
            return firebase_admin.get_app()
        raise
