import unittest

from craftycook.clients import ApiClient
from craftycook.errors import RemoteError, ValidationFailed
from craftycook.notifications import Notifier
from craftycook.reports import ReportService
from tests.fakes import fake_session, make_response


class TestReportService(unittest.TestCase):
    """Report intake validates before anything is sent."""

    def service(self, *outcomes):
        api = ApiClient(base_url="http://api.test", token="tok", session=fake_session(*outcomes))
        self.notifier = Notifier()
        return ReportService(api, self.notifier)

    def test_report_user_payload(self):
        service = self.service({"success": True})
        service.report_user("u1", "  posts the same spam link  ", category="spam", post_id="p1", post_title="Bread")
        kwargs = service.api.session.request.call_args.kwargs
        self.assertEqual(
            kwargs["json"],
            {
                "reportedUserId": "u1",
                "category": "spam",
                "reason": "posts the same spam link",
                "postId": "p1",
                "postTitle": "Bread",
            },
        )
        self.assertEqual(self.notifier.last.message, "Report submitted successfully. Our team will review it.")

    def test_short_reason_rejected_without_request(self):
        service = self.service()
        with self.assertRaises(ValidationFailed) as ctx:
            service.report_user("u1", "  too short  ")
        self.assertEqual(ctx.exception.field, "reason")
        service.api.session.request.assert_not_called()
        self.assertIn("at least 10 characters", self.notifier.last.message)

    def test_blank_reason(self):
        service = self.service()
        with self.assertRaises(ValidationFailed):
            service.report_user("u1", "   ")
        self.assertEqual(self.notifier.last.message, "Please provide a reason for reporting")

    def test_unknown_category(self):
        service = self.service()
        with self.assertRaises(ValidationFailed) as ctx:
            service.report_user("u1", "a perfectly detailed reason", category="rude")
        self.assertEqual(ctx.exception.field, "category")

    def test_vendor_report(self):
        service = self.service({"success": True, "message": "Thanks, we will look into it"})
        service.report_vendor("v1", "closed-permanently", "shop shut down last month")
        body = service.api.session.request.call_args.kwargs["json"]
        self.assertEqual(body, {"vendorId": "v1", "category": "closed-permanently", "reason": "shop shut down last month"})
        self.assertEqual(self.notifier.last.message, "Thanks, we will look into it")

    def test_vendor_report_needs_category(self):
        service = self.service()
        with self.assertRaises(ValidationFailed):
            service.report_vendor("v1", "", "shop shut down last month")

    def test_server_rejection(self):
        service = self.service(make_response(400, {"success": False, "message": "You cannot report yourself"}))
        with self.assertRaises(RemoteError):
            service.report_user("u1", "reporting my own account")
        self.assertEqual(self.notifier.last.message, "You cannot report yourself")


if __name__ == "__main__":
    unittest.main()
