"""
journals.py - Firestore reads and writes for the insights workflow

- list_users: every document in `app_users` -> User records.
- fetch_journals: every document in `user_journals` -> JournalEntry records.
- write_insights: one atomic batch of full-document sets into `users_insights`.

Every function takes the Firestore client explicitly; the client is created
once per process by the application (see main.py). Read and commit errors are
not caught here: they propagate to the invocation handler unchanged.
"""

import logging
from datetime import datetime
from typing import List, Sequence

import pytz
from google.cloud import firestore

from .config import (
    FIRESTORE_INSIGHTS_COLLECTION,
    FIRESTORE_JOURNALS_COLLECTION,
    FIRESTORE_USERS_COLLECTION,
)
from .models import JournalEntry, User, UserInsight

_logger = logging.getLogger(__name__)


def _now_millis() -> int:
    """Current UTC time as epoch milliseconds."""
    return int(datetime.now(pytz.utc).timestamp() * 1000)


def list_users(db: firestore.Client) -> List[User]:
    """Read the whole users collection in one call."""
    users = [
        User.from_document(doc.to_dict(), doc_id=doc.id)
        for doc in db.collection(FIRESTORE_USERS_COLLECTION).stream()
    ]
    _logger.info("Fetched %d users from '%s'", len(users), FIRESTORE_USERS_COLLECTION)
    return users


def fetch_journals(db: firestore.Client) -> List[JournalEntry]:
    """Read the whole journals collection in one call, preserving fetch order."""
    journals = [
        JournalEntry.from_document(doc.to_dict())
        for doc in db.collection(FIRESTORE_JOURNALS_COLLECTION).stream()
    ]
    _logger.info("Fetched %d journal entries from '%s'", len(journals), FIRESTORE_JOURNALS_COLLECTION)
    return journals


def write_insights(db: firestore.Client, insights: Sequence[UserInsight]) -> int:
    """
    Persist one insight document per user, keyed by uid, in a single batch.

    A plain `set` (no merge) replaces any previous insight for that uid.
    The batch is committed once: either every set is applied or none is.

    Returns:
        Number of documents written.
    """
    batch = db.batch()
    for item in insights:
        doc_ref = db.collection(FIRESTORE_INSIGHTS_COLLECTION).document(item.uid)
        batch.set(doc_ref, {
            "insights": item.insight,
            "uid": item.uid,
            "createdAt": _now_millis(),
        })

    batch.commit()
    _logger.info("Committed %d insight documents to '%s'", len(insights), FIRESTORE_INSIGHTS_COLLECTION)
    return len(insights)
