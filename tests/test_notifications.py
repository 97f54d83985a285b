"""Tests for notification delivery and the retry sweep."""
from unittest.mock import MagicMock, patch

import httpx
import pytest
from django.core import mail

from apps.notifications.models import EventNotification
from apps.notifications.notifiers import dispatch_notification, send_webhook_notification
from apps.notifications.tasks import create_notification, dispatch_pending_notifications


@pytest.fixture
def make_notification(db):
    def _make(**overrides):
        data = {
            "event_type": EventNotification.EventType.MATCHING_FAILED,
            "channel": EventNotification.Channel.WEBHOOK,
            "subject": "Auto-match failed",
            "body": "Brief could not be matched",
            "payload": {"code": "service_unavailable"},
        }
        data.update(overrides)
        return EventNotification.objects.create(**data)
    return _make


class TestWebhook:
    @patch("apps.notifications.notifiers.httpx.post")
    def test_success(self, mock_post, settings, make_notification):
        settings.WEBHOOK_URL = "https://ops.example/hooks/onedesigner"
        mock_post.return_value = MagicMock(status_code=200)
        notification = make_notification()

        assert send_webhook_notification(notification) is True

        url = mock_post.call_args.args[0]
        payload = mock_post.call_args.kwargs["json"]
        assert url == "https://ops.example/hooks/onedesigner"
        assert payload["event"] == "matching_failed"
        assert payload["payload"] == {"code": "service_unavailable"}
        notification.refresh_from_db()
        assert notification.delivery_status == EventNotification.DeliveryStatus.SENT
        assert notification.sent_at is not None

    @patch("apps.notifications.notifiers.httpx.post")
    def test_recipient_overrides_default_url(self, mock_post, settings, make_notification):
        settings.WEBHOOK_URL = "https://ops.example/default"
        notification = make_notification(recipient="https://hooks.example/custom")
        send_webhook_notification(notification)
        assert mock_post.call_args.args[0] == "https://hooks.example/custom"

    @patch("apps.notifications.notifiers.httpx.post")
    def test_connection_error_marks_failed(self, mock_post, settings, make_notification):
        settings.WEBHOOK_URL = "https://ops.example/hooks/onedesigner"
        mock_post.side_effect = httpx.ConnectError("connection refused")
        notification = make_notification()

        assert send_webhook_notification(notification) is False

        notification.refresh_from_db()
        assert notification.delivery_status == EventNotification.DeliveryStatus.FAILED
        assert "connection refused" in notification.error_message

    @patch("apps.notifications.notifiers.httpx.post")
    def test_error_status_marks_failed(self, mock_post, settings, make_notification):
        settings.WEBHOOK_URL = "https://ops.example/hooks/onedesigner"
        response = MagicMock()
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "502 Bad Gateway", request=MagicMock(), response=MagicMock()
        )
        mock_post.return_value = response
        notification = make_notification()

        assert send_webhook_notification(notification) is False
        notification.refresh_from_db()
        assert notification.delivery_status == EventNotification.DeliveryStatus.FAILED

    @patch("apps.notifications.notifiers.httpx.post")
    def test_no_url_leaves_pending(self, mock_post, make_notification):
        notification = make_notification()
        assert send_webhook_notification(notification) is False
        mock_post.assert_not_called()
        notification.refresh_from_db()
        assert notification.delivery_status == EventNotification.DeliveryStatus.PENDING


class TestDispatch:
    def test_internal_is_stored_as_sent(self, make_notification):
        notification = make_notification(channel=EventNotification.Channel.INTERNAL)
        assert dispatch_notification(notification) is True
        notification.refresh_from_db()
        assert notification.delivery_status == EventNotification.DeliveryStatus.SENT

    def test_create_notification_sends_email(self, db):
        pk = create_notification(
            event_type="new_match",
            subject="You've been matched with a new project",
            body="Hi Ana",
            channel="email",
            recipient="ana@example.com",
        )
        notification = EventNotification.objects.get(pk=pk)
        assert notification.delivery_status == EventNotification.DeliveryStatus.SENT
        assert mail.outbox[0].to == ["ana@example.com"]


class TestRetrySweep:
    @patch("apps.notifications.notifiers.httpx.post")
    def test_retries_pending_and_failed(self, mock_post, settings, make_notification):
        settings.WEBHOOK_URL = "https://ops.example/hooks/onedesigner"
        failed_email = make_notification(
            event_type=EventNotification.EventType.NEW_MATCH,
            channel=EventNotification.Channel.EMAIL,
            recipient="ana@example.com",
            delivery_status=EventNotification.DeliveryStatus.FAILED,
            error_message="smtp down",
        )
        pending_webhook = make_notification()
        already_sent = make_notification(
            channel=EventNotification.Channel.EMAIL,
            recipient="bob@example.com",
            delivery_status=EventNotification.DeliveryStatus.SENT,
        )
        internal = make_notification(channel=EventNotification.Channel.INTERNAL)

        assert dispatch_pending_notifications() == {"sent": 2}

        assert [m.to for m in mail.outbox] == [["ana@example.com"]]
        mock_post.assert_called_once()
        for notification in (failed_email, pending_webhook):
            notification.refresh_from_db()
            assert notification.delivery_status == EventNotification.DeliveryStatus.SENT
            assert notification.error_message == ""
        already_sent.refresh_from_db()
        assert already_sent.sent_at is None
        internal.refresh_from_db()
        assert internal.delivery_status == EventNotification.DeliveryStatus.PENDING

    @patch("apps.notifications.notifiers.httpx.post")
    def test_still_failing_stays_failed(self, mock_post, settings, make_notification):
        settings.WEBHOOK_URL = "https://ops.example/hooks/onedesigner"
        mock_post.side_effect = httpx.ReadTimeout("timed out")
        notification = make_notification(delivery_status=EventNotification.DeliveryStatus.FAILED)

        assert dispatch_pending_notifications() == {"sent": 0}

        notification.refresh_from_db()
        assert notification.delivery_status == EventNotification.DeliveryStatus.FAILED
        assert "timed out" in notification.error_message
