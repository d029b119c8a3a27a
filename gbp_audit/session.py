"""
One user's audit session: draft autosave, submission, history and reset.
"""
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .drafts import DraftStore
from .errors import AuditInProgressError, GenerationError, ValidationError
from .history import HistoryLog
from .input_handler import validate_business_input
from .models import AuditEntry, AuditResult, DraftForm
from .storage import KeyValueStore

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill out all fields."
GENERATION_FAILED_MESSAGE = "Failed to perform audit. The AI model may be busy. Please try again later."

_FIELD_ALIASES = {
    "businessName": "business_name",
    "phoneNumber": "phone_number",
}


class AuditSession:
    """
    Drives a single audit form.

    ``client`` needs async ``request_audit(business)`` and
    ``summarize(result, business_name)``; see GroqAuditClient and
    MockAuditClient.
    """

    def __init__(self, client, store: KeyValueStore,
                 clock: Optional[Callable[[], datetime]] = None):
        self.client = client
        self.drafts = DraftStore(store)
        self.history = HistoryLog(store)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

        self.draft: DraftForm = self.drafts.load()
        self.result: Optional[AuditResult] = None
        self.error: Optional[str] = None
        self.is_loading = False

    def update_field(self, name: str, value: str):
        """Set one form field. Saved to the store while no result is showing."""
        name = _FIELD_ALIASES.get(name, name)
        if name not in DraftForm.model_fields:
            raise KeyError(name)
        setattr(self.draft, name, value)
        if self.result is None:
            self.drafts.save(self.draft)

    async def run_audit(self) -> AuditResult:
        """
        Submit the current draft.

        On success the submission is added to the history before the saved
        draft is cleared. The in-memory fields stay until new_audit().
        """
        if self.is_loading:
            raise AuditInProgressError("An audit is already running")

        try:
            business = validate_business_input(self.draft.as_input_data())
        except ValidationError as e:
            self.error = MISSING_FIELDS_MESSAGE if not self.draft.is_complete() else str(e)
            raise

        self.is_loading = True
        self.error = None
        self.result = None
        try:
            result = await self.client.request_audit(business)
        except GenerationError as e:
            logger.warning("Audit failed for %r: %s", business.business_name, e)
            self.error = GENERATION_FAILED_MESSAGE
            raise
        finally:
            self.is_loading = False

        self.result = result
        self.history.append(AuditEntry.from_input(business, self.clock()))
        self.drafts.clear()
        return result

    async def email_summary(self) -> str:
        if self.result is None:
            raise RuntimeError("No audit result to summarize")
        return await self.client.summarize(self.result, self.draft.business_name)

    def new_audit(self):
        """Drop the current result and start over with an empty form."""
        self.result = None
        self.error = None
        self.draft = DraftForm()
        self.drafts.save(self.draft)
