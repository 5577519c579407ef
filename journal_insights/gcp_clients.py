"""
gcp_clients.py - Google Cloud helper utilities

Exposes `get_firestore_client()`, the single place where the Firestore client
is constructed. The application creates it once at startup and passes it to
the store functions; nothing else in the package opens its own connection.
"""

import logging
from typing import Optional

from google.cloud import firestore

_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())


def get_firestore_client(project: Optional[str] = None) -> Optional[firestore.Client]:
    """
    Initialize and return a Firestore client.

    Args:
        project: GCP project id. When None the client resolves it from the
            ambient credentials (GOOGLE_APPLICATION_CREDENTIALS / metadata server).

    Returns:
        Firestore client instance, or None on failure.
    """
    try:
        _logger.debug("Initializing Firestore client for project: %s", project or "<default>")
        return firestore.Client(project=project)
    except Exception as e:
        _logger.exception("Firestore client initialization failed: %s", e)
        return None
