"""
models.py - Record types read from and produced by the insights workflow

Documents coming out of Firestore are loosely typed dicts. They are turned
into these records at the read boundary (see journals.py) so the rest of the
workflow works with explicit fields:

- User: one app user, identified by `uid` (always a string).
- JournalEntry: answers to the three daily questions. Values are kept exactly
  as stored; a field missing from the document stays unset and is left out
  when the entry is serialized for the prompt.
- UserInsight: the raw model reply generated for one user.
"""

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidDocumentError

JOURNAL_FIELDS = ("uid", "rememberThisDayBy", "moodToday", "challenges")


class User(BaseModel):
    uid: str

    @classmethod
    def from_document(cls, data: Optional[Mapping[str, Any]], doc_id: str = "") -> "User":
        """Build a User from an `app_users` document, coercing `uid` to str."""
        if not data or data.get("uid") is None:
            raise InvalidDocumentError(f"User document {doc_id!r} has no uid field")
        return cls(uid=str(data["uid"]))


class JournalEntry(BaseModel):
    """One journal document. Field values are not validated or coerced."""

    model_config = ConfigDict(populate_by_name=True)

    uid: Any = None
    remember_this_day_by: Any = Field(default=None, alias="rememberThisDayBy")
    mood_today: Any = Field(default=None, alias="moodToday")
    challenges: Any = None

    @classmethod
    def from_document(cls, data: Optional[Mapping[str, Any]]) -> "JournalEntry":
        data = data or {}
        # Only pass the keys that exist so absent fields stay "unset"
        return cls.model_validate({k: data[k] for k in JOURNAL_FIELDS if k in data})

    def to_record(self) -> Dict[str, Any]:
        """Stored (camelCase) representation, omitting fields the document did not have."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class UserInsight(BaseModel):
    uid: str
    insight: str


def serialize_journals(entries: Sequence[JournalEntry]) -> str:
    """Compact JSON array of the entries, in the order given."""
    records: List[Dict[str, Any]] = [entry.to_record() for entry in entries]
    return json.dumps(records, separators=(",", ":"), ensure_ascii=False, default=str)
