"""
Draft form fields, saved as the user types so a restart does not lose them.
"""

from .models import DRAFT_FIELDS, DraftForm
from .storage import KeyValueStore


DRAFT_KEYS = {
    "email": "gbp-auditor-email",
    "business_name": "gbp-auditor-businessName",
    "location": "gbp-auditor-location",
    "phone_number": "gbp-auditor-phoneNumber",
}


class DraftStore:
    """One store key per form field."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self) -> DraftForm:
        values = {}
        for name in DRAFT_FIELDS:
            value = self.store.get(DRAFT_KEYS[name])
            if value is not None:
                values[name] = value
        return DraftForm(**values)

    def save(self, draft: DraftForm):
        for name in DRAFT_FIELDS:
            self.store.set(DRAFT_KEYS[name], getattr(draft, name))

    def clear(self):
        for key in DRAFT_KEYS.values():
            self.store.remove(key)
