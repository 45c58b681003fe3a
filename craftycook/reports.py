import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .clients import ApiClient, error_message
from .config import ENDPOINTS
from .errors import CraftyCookError, ValidationFailed
from .models import Report, ReportCategory, VendorReport, VendorReportCategory
from .notifications import Notifier

logger = logging.getLogger(__name__)

MIN_REASON_LENGTH = 10


def _check_reason(reason: str) -> str:
    reason = (reason or "").strip()
    if not reason:
        raise ValidationFailed("Please provide a reason for reporting", field="reason")
    if len(reason) < MIN_REASON_LENGTH:
        raise ValidationFailed(
            f"Please provide more details (at least {MIN_REASON_LENGTH} characters)", field="reason"
        )
    return reason


class ReportService:
    """Write-once moderation intake for users and vendors."""

    def __init__(self, api: ApiClient, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier

    def _validate(self, model_cls, **fields: Any):
        try:
            fields["reason"] = _check_reason(fields.get("reason", ""))
            return model_cls(**fields)
        except ValidationFailed as exc:
            self.notifier.error(exc.message)
            raise
        except ValidationError as exc:
            message = "Please select a report category"
            self.notifier.error(message)
            raise ValidationFailed(message, field="category") from exc

    def report_user(
        self,
        reported_user_id: str,
        reason: str,
        category: str = ReportCategory.SPAM.value,
        post_id: Optional[str] = None,
        post_title: Optional[str] = None,
    ) -> Dict[str, Any]:
        report = self._validate(
            Report,
            reported_user_id=reported_user_id,
            category=category,
            reason=reason,
            post_id=post_id,
            post_title=post_title,
        )
        try:
            data = self.api.post(ENDPOINTS["reports"], json=report.to_payload(), auth=True)
        except CraftyCookError as exc:
            logger.error("Error submitting report: %s", exc)
            self.notifier.error(error_message(exc, "Failed to submit report. Please try again."))
            raise
        self.notifier.success("Report submitted successfully. Our team will review it.")
        return data

    def report_vendor(self, vendor_id: str, category: str, reason: str) -> Dict[str, Any]:
        if not category:
            self.notifier.error("Please select a report category")
            raise ValidationFailed("Please select a report category", field="category")
        report = self._validate(VendorReport, vendor_id=vendor_id, category=category, reason=reason)
        try:
            data = self.api.post(ENDPOINTS["vendor_reports"], json=report.to_payload(), auth=True)
        except CraftyCookError as exc:
            logger.error("Error submitting vendor report: %s", exc)
            self.notifier.error(error_message(exc, "Failed to submit report"))
            raise
        self.notifier.success(str(data.get("message") or "Report submitted successfully"))
        return data
