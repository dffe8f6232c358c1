"""
Firebase Admin setup.

The default app and the async Firestore client are process-wide and created
at most once.
"""
from __future__ import annotations

import json
import logging
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore_async

from loyverse_bridge.config import Settings

logger = logging.getLogger(__name__)

_firestore_client = None


def init_firebase(settings: Settings) -> Optional[firebase_admin.App]:
    """Initialise the default Firebase app unless it already exists."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if not settings.FIREBASE_SERVICE_ACCOUNT:
        logger.error("FIREBASE_SERVICE_ACCOUNT is not configured")
        return None

    cred = credentials.Certificate(json.loads(settings.FIREBASE_SERVICE_ACCOUNT))
    app = firebase_admin.initialize_app(cred)
    logger.info("Firebase initialised (project: %s)", app.project_id)
    return app


def get_firestore(settings: Settings):
    """Return the shared async Firestore client, initialising Firebase on first use."""
    global _firestore_client
    if _firestore_client is None:
        app = init_firebase(settings)
        if app is None:
            raise RuntimeError("Firebase is not initialised: missing service account")
        _firestore_client = firestore_async.client(app)
    return _firestore_client
