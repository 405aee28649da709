"""
Backend SDK clients.

Both clients are built on first use so that importing the service never needs
credentials for a backend that is not selected.
"""

import logging
import threading
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore
from supabase import Client, ClientOptions, create_client

from journal_service.core.config import Config, settings

logger = logging.getLogger("Journal.Database.Clients")

_lock = threading.Lock()
_supabase: Optional[Client] = None
_firestore = None


def get_supabase_client(config: Config = settings) -> Client:
    """Return the shared Supabase client, creating it on first call."""
    global _supabase
    with _lock:
        if _supabase is None:
            if not config.SUPABASE_URL or not config.SUPABASE_KEY:
                raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be set for the supabase backend")
            _supabase = create_client(
                config.SUPABASE_URL,
                config.SUPABASE_KEY,
                options=ClientOptions(postgrest_client_timeout=config.BACKEND_TIMEOUT_SECONDS),
            )
            logger.info("Supabase client initialized")
        return _supabase


def get_firestore_client(config: Config = settings):
    """Return the shared Firestore client, initializing Firebase Admin once."""
    global _firestore
    with _lock:
        if _firestore is None:
            try:
                firebase_admin.get_app()
                logger.debug("Firebase app already initialized")
            except ValueError:
                if config.FIREBASE_CREDENTIALS_PATH:
                    cred = credentials.Certificate(config.FIREBASE_CREDENTIALS_PATH)
                else:
                    cred = credentials.ApplicationDefault()
                firebase_admin.initialize_app(cred)
                logger.info("Firebase app initialized")
            _firestore = firestore.client()
            logger.info("Firestore client initialized")
        return _firestore
