"""
Test suite for the bulk enrollment workflow.

Tests selection handling, submit locking and reconciliation of partial
bulk-add results.

System role: Verification of participant enrollment logic
"""

import pytest

from syntegra.core.enrollment import BulkEnrollmentForm, reconcile_bulk_add
from syntegra.core.exceptions import FormValidationError
from syntegra.core.notifications import ToastVariant
from syntegra.models.participant import ParticipantUser


def _user(user_id: str, name: str = "Budi") -> ParticipantUser:
    return ParticipantUser(id=user_id, name=name)


class TestBulkEnrollmentSelection:
    """Selection state of the bulk-add dialog."""

    def test_empty_selection_cannot_submit(self) -> None:
        form = BulkEnrollmentForm()

        assert form.can_submit is False
        with pytest.raises(FormValidationError) as exc_info:
            form.to_request()
        assert exc_info.value.errors["participants"] == "Minimal satu peserta harus dipilih"

    def test_add_user_ignores_duplicates(self) -> None:
        form = BulkEnrollmentForm()

        assert form.add_user(_user("u1")) is True
        assert form.add_user(_user("u1", "Budi lagi")) is False
        assert form.add_user(_user("u2", "Sari")) is True

        assert form.selected_ids == ["u1", "u2"]
        assert form.selected_users[0].name == "Budi"

    def test_remove_and_clear(self) -> None:
        form = BulkEnrollmentForm()
        form.add_user(_user("u1"))
        form.add_user(_user("u2"))

        form.remove_user("u1")
        form.remove_user("missing")
        assert form.selected_ids == ["u2"]

        form.clear()
        assert form.selected_ids == []

    def test_to_request_carries_settings(self) -> None:
        form = BulkEnrollmentForm(link_expires_hours=48, send_invitations=False)
        form.add_user(_user("u1"))

        request = form.to_request()

        assert [entry.user_id for entry in request.participants] == ["u1"]
        assert request.link_expires_hours == 48
        assert request.send_invitations is False

    @pytest.mark.parametrize(
        "hours, message",
        [
            (0, "Minimal 1 jam"),
            (169, "Maksimal 168 jam (7 hari)"),
            ("24", "Masa berlaku link harus berupa angka"),
            (1.4, "Masa berlaku link harus berupa bilangan bulat"),
        ],
    )
    def test_link_expiry_outside_range_is_rejected(self, hours, message) -> None:
        form = BulkEnrollmentForm(link_expires_hours=hours)
        form.add_user(_user("u1"))

        with pytest.raises(FormValidationError) as exc_info:
            form.to_request()

        assert exc_info.value.errors["link_expires_hours"] == message

    @pytest.mark.parametrize("hours", [1, 168])
    def test_link_expiry_bounds_are_inclusive(self, hours) -> None:
        form = BulkEnrollmentForm(link_expires_hours=hours)
        form.add_user(_user("u1"))

        assert form.to_request().link_expires_hours == hours


class TestBulkEnrollmentSubmit:
    """Submit locking."""

    def test_begin_submit_locks_form(self) -> None:
        form = BulkEnrollmentForm()
        form.add_user(_user("u1"))

        form.begin_submit()

        assert form.submitting is True
        assert form.can_submit is False
        with pytest.raises(FormValidationError):
            form.begin_submit()

    def test_invalid_form_does_not_lock(self) -> None:
        form = BulkEnrollmentForm()

        with pytest.raises(FormValidationError):
            form.begin_submit()

        assert form.submitting is False

    def test_successful_finish_clears_selection(self) -> None:
        form = BulkEnrollmentForm()
        form.add_user(_user("u1"))
        form.begin_submit()

        form.finish_submit(succeeded=True)

        assert form.submitting is False
        assert form.selected_ids == []

    def test_failed_finish_keeps_selection(self) -> None:
        form = BulkEnrollmentForm()
        form.add_user(_user("u1"))
        form.begin_submit()

        form.finish_submit(succeeded=False)

        assert form.submitting is False
        assert form.selected_ids == ["u1"]
        assert form.can_submit is True


class TestReconcileBulkAdd:
    """Interpretation of the bulk-add response."""

    def test_full_success_single_toast(self) -> None:
        data = {
            "added_participants": [{"id": "p1", "user_id": "u1"}, {"id": "p2", "user_id": "u2"}],
            "total_added": 2,
            "invitation_status": {"sent": 2, "failed": 0, "skipped": 0},
        }

        outcome, toasts = reconcile_bulk_add(data)

        assert outcome.total_added == 2
        assert outcome.partial is False
        assert outcome.invitations.sent == 2
        assert len(toasts) == 1
        assert toasts[0].variant == ToastVariant.SUCCESS
        assert toasts[0].description == "2 peserta ditambahkan"

    def test_partial_success_adds_warning(self) -> None:
        data = {
            "added_participants": [{"id": "p1", "user_id": "u1"}],
            "total_added": 1,
            "skipped_participants": [
                {"user_id": "u2", "user_name": "Sari", "reason": "Already enrolled"},
                {"user_id": "u3", "reason": "User inactive"},
            ],
        }

        outcome, toasts = reconcile_bulk_add(data)

        assert outcome.partial is True
        assert [item.user_id for item in outcome.skipped] == ["u2", "u3"]
        assert toasts[0].description == "1 peserta ditambahkan, 2 dilewati"
        assert toasts[1].variant == ToastVariant.WARNING
        assert toasts[1].title == "2 peserta dilewati"

    def test_total_added_falls_back_to_added_list(self) -> None:
        outcome, _ = reconcile_bulk_add({"added_participants": [{"id": "p1", "user_id": "u1"}]})

        assert outcome.total_added == 1
        assert outcome.skipped == []

    def test_empty_data(self) -> None:
        outcome, toasts = reconcile_bulk_add({})

        assert outcome.total_added == 0
        assert toasts[0].description == "0 peserta ditambahkan"
