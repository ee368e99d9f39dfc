"""
Unit tests for RegistrationService workflow logic.

Tests the orchestrator with mocked ports to verify:
- Validation failures stop the workflow before any side effect
- Persistence failures stop the workflow before any email
- Notification failures never undo or fail a persisted registration
- The on-demand pass flow reads, renders, and emails exactly once
"""

import logging
from unittest.mock import Mock

import pytest

from src.domain.exceptions import NotificationError, PassRenderingError, PersistenceError
from src.domain.models import PassFailureReason, PassFields, WorkflowStatus
from src.domain.notifications import NotificationDispatcher
from src.domain.registration import RegistrationService
from tests.conftest import PHOTO, SIGNATURE, make_input, make_record


class TestSubmitRegistrationValidation:
    """Tests for the RECEIVED -> DONE(failure) transition."""

    def test_invalid_input_returns_field_errors(
        self, service: RegistrationService, repository: Mock, email_sender: Mock
    ) -> None:
        """Every invalid field is reported and nothing is written or sent."""
        data = make_input(name="A", email="bad", phone="123", category_id="", signature="", photo="")

        result = service.submit_registration(data)

        assert result.status == WorkflowStatus.FAILURE
        assert result.errors is not None
        assert set(result.errors) == {
            "name",
            "email",
            "phone",
            "category_id",
            "signature",
            "photo",
        }
        assert result.record_id is None
        repository.insert.assert_not_called()
        email_sender.send.assert_not_called()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "A"},
            {"email": "not-an-email"},
            {"phone": "555"},
            {"category_id": ""},
            {"signature": ""},
        ],
    )
    def test_any_single_violation_blocks_side_effects(
        self,
        service: RegistrationService,
        repository: Mock,
        email_sender: Mock,
        overrides: dict[str, str],
    ) -> None:
        result = service.submit_registration(make_input(**overrides))

        assert not result.success
        assert result.errors
        repository.insert.assert_not_called()
        email_sender.send.assert_not_called()

    def test_validation_failure_message(self, service: RegistrationService) -> None:
        result = service.submit_registration(make_input(name="A"))
        assert result.message == "Validation failed. Please check your input."

    def test_validation_failure_logged_at_info(
        self, service: RegistrationService, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Field errors are routine and never logged as exceptions."""
        with caplog.at_level(logging.INFO):
            service.submit_registration(make_input(name="A"))

        assert all(record.levelno == logging.INFO for record in caplog.records)
        assert all(record.exc_info is None for record in caplog.records)


class TestSubmitRegistrationPersistence:
    """Tests for the VALIDATED -> PERSISTED transition."""

    def test_valid_input_inserted_once(
        self, service: RegistrationService, repository: Mock
    ) -> None:
        data = make_input()
        service.submit_registration(data)
        repository.insert.assert_called_once_with(data)

    def test_persistence_failure_returns_top_level_message(
        self, service: RegistrationService, repository: Mock, email_sender: Mock
    ) -> None:
        """Store failures end the workflow with a message and no field errors."""
        repository.insert.side_effect = PersistenceError("connection refused")

        result = service.submit_registration(make_input())

        assert result.status == WorkflowStatus.FAILURE
        assert result.errors is None
        assert result.record_id is None
        assert "could not save" in result.message
        email_sender.send.assert_not_called()

    def test_persistence_failure_logged(
        self,
        service: RegistrationService,
        repository: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        repository.insert.side_effect = PersistenceError("connection refused")

        with caplog.at_level(logging.ERROR):
            service.submit_registration(make_input())

        assert "could not be persisted" in caplog.text


class TestSubmitRegistrationNotification:
    """Tests for the PERSISTED -> NOTIFIED -> DONE(success) transition."""

    def test_success_result(self, service: RegistrationService, email_sender: Mock) -> None:
        """Happy path: record id returned and confirmation mentioned."""
        result = service.submit_registration(make_input())

        assert result.status == WorkflowStatus.SUCCESS
        assert result.success
        assert result.record_id == "rec-1"
        assert result.errors is None
        assert result.confirmation_sent is True
        assert "Jo Lee" in result.message
        assert result.message.endswith("A confirmation email has been sent.")
        email_sender.send.assert_called_once()

    def test_confirmation_addressed_to_registrant(
        self, service: RegistrationService, email_sender: Mock
    ) -> None:
        service.submit_registration(make_input())

        message = email_sender.send.call_args[0][0]
        assert message.recipient == "jo@example.com"
        assert message.template == "registration_confirmation"
        assert message.params == {"name": "Jo Lee"}
        assert message.attachments == ()

    def test_sender_exception_does_not_fail_registration(
        self, service: RegistrationService, repository: Mock, email_sender: Mock
    ) -> None:
        """A failing provider leaves the record in place and the result successful."""
        email_sender.send.side_effect = NotificationError("provider down")

        result = service.submit_registration(make_input())

        repository.insert.assert_called_once()
        assert result.status == WorkflowStatus.SUCCESS
        assert result.record_id == "rec-1"
        assert result.confirmation_sent is False
        assert result.message == "Thank you for registering, Jo Lee!"

    def test_unexpected_sender_error_is_absorbed(
        self, service: RegistrationService, email_sender: Mock
    ) -> None:
        email_sender.send.side_effect = RuntimeError("boom")

        result = service.submit_registration(make_input())

        assert result.success
        assert result.confirmation_sent is False

    def test_notification_failure_logged(
        self,
        service: RegistrationService,
        email_sender: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        email_sender.send.side_effect = NotificationError("provider down")

        with caplog.at_level(logging.WARNING):
            service.submit_registration(make_input())

        assert "kept without confirmation email" in caplog.text
        assert "provider down" in caplog.text

    def test_end_to_end_scenario(
        self, repository: Mock, categories: Mock, renderer: Mock
    ) -> None:
        """Jo Lee registers: one insert, one confirmation email, success naming Jo Lee."""
        sender = Mock()
        service = RegistrationService(
            repository=repository,
            categories=categories,
            dispatcher=NotificationDispatcher(
                email_sender=sender, sender_address="events@example.com"
            ),
            renderer=renderer,
        )

        result = service.submit_registration(
            make_input(
                name="Jo Lee",
                email="jo@example.com",
                phone="5551234567",
                category_id="cat1",
                signature=SIGNATURE,
                photo=PHOTO,
            )
        )

        assert result.success
        assert "Jo Lee" in result.message
        assert repository.insert.call_count == 1
        assert sender.send.call_count == 1
        renderer.render.assert_not_called()


class TestSendPassFor:
    """Tests for the on-demand pass email flow."""

    def test_missing_record_not_found(
        self,
        service: RegistrationService,
        repository: Mock,
        renderer: Mock,
        email_sender: Mock,
    ) -> None:
        repository.get_by_id.return_value = None

        result = service.send_pass_for("missing")

        assert result.success is False
        assert result.reason == PassFailureReason.NOT_FOUND
        assert "not found" in result.message.lower()
        renderer.render.assert_not_called()
        email_sender.send.assert_not_called()

    def test_existing_record_rendered_and_sent_once(
        self,
        service: RegistrationService,
        repository: Mock,
        renderer: Mock,
        email_sender: Mock,
    ) -> None:
        record = make_record("rec-9")
        repository.get_by_id.return_value = record

        result = service.send_pass_for("rec-9")

        assert result.success is True
        assert result.reason == PassFailureReason.SENT
        repository.get_by_id.assert_called_once_with("rec-9")
        renderer.render.assert_called_once_with(
            PassFields(
                name="Jo Lee",
                phone="5551234567",
                category="VIP",
                photo=PHOTO,
                signature=SIGNATURE,
            )
        )
        email_sender.send.assert_called_once()
        message = email_sender.send.call_args[0][0]
        assert message.template == "registration_pass"
        assert message.recipient == "jo@example.com"
        assert len(message.attachments) == 1
        assert message.attachments[0].content == b"%PDF-1.7 pass"
        assert message.attachments[0].filename == "registration-pass.pdf"

    def test_deleted_category_falls_back_to_id(
        self,
        service: RegistrationService,
        repository: Mock,
        categories: Mock,
        renderer: Mock,
    ) -> None:
        repository.get_by_id.return_value = make_record(category_id="gone-cat")
        categories.get_by_id.return_value = None

        service.send_pass_for("rec-1")

        fields = renderer.render.call_args[0][0]
        assert fields.category == "gone-cat"

    def test_delivery_failure_is_operation_failure(
        self,
        service: RegistrationService,
        repository: Mock,
        email_sender: Mock,
    ) -> None:
        """Unlike submissions, a failed pass email fails the operation."""
        repository.get_by_id.return_value = make_record()
        email_sender.send.side_effect = NotificationError("provider down")

        result = service.send_pass_for("rec-1")

        assert result.success is False
        assert result.reason == PassFailureReason.DELIVERY_FAILED

    def test_render_failure_is_operation_failure(
        self,
        service: RegistrationService,
        repository: Mock,
        renderer: Mock,
        email_sender: Mock,
    ) -> None:
        repository.get_by_id.return_value = make_record()
        renderer.render.side_effect = PassRenderingError("bad image")

        result = service.send_pass_for("rec-1")

        assert result.success is False
        assert result.reason == PassFailureReason.RENDER_FAILED
        email_sender.send.assert_not_called()

    def test_unexpected_renderer_error_is_operation_failure(
        self,
        service: RegistrationService,
        repository: Mock,
        renderer: Mock,
        email_sender: Mock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        repository.get_by_id.return_value = make_record()
        renderer.render.side_effect = OSError("cannot load library 'libpango-1.0-0'")

        with caplog.at_level(logging.ERROR):
            result = service.send_pass_for("rec-1")

        assert result.success is False
        assert result.reason == PassFailureReason.RENDER_FAILED
        assert "Pass rendering failed" in caplog.text
        email_sender.send.assert_not_called()

    def test_store_read_failure_propagates(
        self, service: RegistrationService, repository: Mock
    ) -> None:
        repository.get_by_id.side_effect = PersistenceError("timeout")

        with pytest.raises(PersistenceError):
            service.send_pass_for("rec-1")


class TestListRegistrations:
    def test_delegates_to_repository(
        self, service: RegistrationService, repository: Mock
    ) -> None:
        records = [make_record("rec-2"), make_record("rec-1")]
        repository.list_recent.return_value = records

        assert service.list_registrations() == records
