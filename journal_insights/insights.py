"""
insights.py - Per-user insight generation

Reads all users and all journal entries, then walks the users in fetch order
and asks the InsightClient for insights about each user that has at least one
journal entry.

Design/behavioral notes:
- Users are processed one at a time: at most one API request is in flight.
- A user without journal entries is skipped and never reaches the API.
- An error from the client stops the loop; later users are not processed.
"""

import logging
from typing import List

from google.cloud import firestore

from .insight_client import InsightClient
from .journals import fetch_journals, list_users
from .models import UserInsight, serialize_journals

_logger = logging.getLogger(__name__)


def generate_user_insights(db: firestore.Client, client: InsightClient) -> List[UserInsight]:
    """
    Build the list of insights for this invocation.

    Returns:
        One UserInsight per user that has journals and got a non-empty reply,
        in user fetch order.
    """
    users = list_users(db)
    journals = fetch_journals(db)
    insights: List[UserInsight] = []

    for user in users:
        user_journals = [journal for journal in journals if journal.uid == user.uid]
        if not user_journals:
            _logger.debug("Skipping user %s: no journal entries", user.uid)
            continue

        _logger.info("Requesting insights for user %s (%d entries)", user.uid, len(user_journals))
        response = client.fetch_insights(serialize_journals(user_journals))
        if response:
            insights.append(UserInsight(uid=user.uid, insight=response))
        else:
            _logger.warning("Empty insights reply for user %s; nothing will be stored", user.uid)

    _logger.info("Generated insights for %d of %d users", len(insights), len(users))
    return insights
