"""
Payment workflow: submission checks and the pending -> approved/declined machine.
"""
import threading
from datetime import timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from conftest import active_rows, payment_count
from studypro.core.plans import PLANS
from studypro.core.errors import InvalidPlan, InvalidReference, InvalidState, NotFound, ValidationError
from studypro.db.base import Base
from studypro.models import Payment, Subscription, User
from studypro.repositories.sql import SqlRepository
from studypro.services import access, ledger, payments
from studypro.utils.dt import utcnow


class TestSubmit:

    def test_weekly_submission_is_pending_with_plan_amount(self, repo, user):
        payment = payments.submit(repo, user.id, "weekly", "ABC123")

        assert payment.id is not None
        assert payment.status == "pending"
        assert payment.amount == 29
        assert payment.plan_key == "weekly"
        assert payment.utr == "ABC123"
        assert payment.payment_ref.startswith("REQ-")
        assert payment.payment_ref != payment.utr

    def test_reference_is_trimmed(self, repo, user):
        payment = payments.submit(repo, user.id, "daily", "  UTR-2024-0001  ")
        assert payment.utr == "UTR-2024-0001"

    def test_short_reference_rejected_without_record(self, repo, db, user):
        with pytest.raises(ValidationError):
            payments.submit(repo, user.id, "weekly", "ab")
        assert payment_count(db) == 0

    @pytest.mark.parametrize("utr", ["", None, "abc 123", "ABC_123", "a" * 41, "ÄBC1234"])
    def test_malformed_references_rejected(self, repo, user, utr):
        with pytest.raises(InvalidReference):
            payments.submit(repo, user.id, "weekly", utr)

    def test_boundary_lengths_accepted(self, repo, user):
        assert payments.submit(repo, user.id, "weekly", "a" * 6).status == "pending"
        assert payments.submit(repo, user.id, "weekly", "b" * 40).status == "pending"

    def test_unknown_plan_rejected_without_record(self, repo, db, user):
        with pytest.raises(InvalidPlan):
            payments.submit(repo, user.id, "yearly", "ABC123")
        assert payment_count(db) == 0

    def test_duplicate_references_are_kept(self, repo, make_user):
        alice, bob = make_user(), make_user()
        p1 = payments.submit(repo, alice.id, "weekly", "SAME-UTR-1")
        p2 = payments.submit(repo, alice.id, "weekly", "SAME-UTR-1")
        p3 = payments.submit(repo, bob.id, "daily", "SAME-UTR-1")

        assert len({p1.id, p2.id, p3.id}) == 3
        assert len({p1.payment_ref, p2.payment_ref, p3.payment_ref}) == 3

    def test_history_is_newest_first(self, repo, make_user):
        alice, bob = make_user(), make_user()
        first = payments.submit(repo, alice.id, "daily", "AAA111")
        payments.submit(repo, bob.id, "daily", "BBB222")
        second = payments.submit(repo, alice.id, "weekly", "CCC333")

        assert [p.id for p in payments.list_for_user(repo, alice.id)] == [second.id, first.id]


class TestApprove:

    def test_approval_creates_weekly_subscription(self, repo, db, user, admin_user):
        payment = payments.submit(repo, user.id, "weekly", "ABC123")

        sub = payments.approve(repo, payment.id, admin_user.id)

        db.refresh(payment)
        assert payment.status == "approved"
        assert payment.reviewed_by == admin_user.id
        assert payment.reviewed_at is not None
        assert sub.status == "active"
        assert sub.payment_id == payment.id
        assert sub.amount == 29
        assert sub.ends_at - sub.starts_at == timedelta(days=7)
        assert access.evaluate(repo, user.id, "books").allowed is True

    def test_second_approval_replaces_active_subscription(self, repo, db, user, admin_user):
        weekly = payments.submit(repo, user.id, "weekly", "WEEK-0001")
        weekly_sub = payments.approve(repo, weekly.id, admin_user.id)
        monthly = payments.submit(repo, user.id, "monthly", "MONTH-0001")
        monthly_sub = payments.approve(repo, monthly.id, admin_user.id)

        db.refresh(weekly_sub)
        assert weekly_sub.status == "expired"
        assert [s.id for s in active_rows(db, user.id)] == [monthly_sub.id]
        assert ledger.current_active(repo, user.id).plan_key == "monthly"

    def test_unknown_payment(self, repo, admin_user):
        with pytest.raises(NotFound):
            payments.approve(repo, 999, admin_user.id)

    def test_declined_payment_cannot_be_approved(self, repo, db, user, admin_user):
        payment = payments.submit(repo, user.id, "weekly", "ABC123")
        payments.decline(repo, payment.id, admin_user.id, "no such transfer")

        with pytest.raises(InvalidState):
            payments.approve(repo, payment.id, admin_user.id)

        db.refresh(payment)
        assert payment.status == "declined"
        assert db.query(Subscription).count() == 0

    def test_approved_payment_cannot_be_approved_again(self, repo, db, user, admin_user):
        payment = payments.submit(repo, user.id, "weekly", "ABC123")
        payments.approve(repo, payment.id, admin_user.id)

        with pytest.raises(InvalidState):
            payments.approve(repo, payment.id, admin_user.id)
        assert db.query(Subscription).count() == 1

    def test_unresolvable_stored_plan_leaves_payment_pending(self, repo, db, user, admin_user):
        with repo.transaction():
            payment = repo.add_payment(Payment(
                user_id=user.id, plan_key="lifetime", amount=500, payment_ref="REQ-LEGACY",
                utr="LEGACY1", status="pending", review_note="",
            ))

        with pytest.raises(InvalidPlan):
            payments.approve(repo, payment.id, admin_user.id)

        db.refresh(payment)
        assert payment.status == "pending"
        assert db.query(Subscription).count() == 0

    def test_failed_activation_rolls_back_approval(self, repo, db, user, admin_user, monkeypatch):
        old = ledger.activate(repo, user.id, PLANS["daily"], 9)
        payment = payments.submit(repo, user.id, "weekly", "ABC123")

        def _boom(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(ledger, "append_active", _boom)
        with pytest.raises(RuntimeError):
            payments.approve(repo, payment.id, admin_user.id)

        assert repo.get_payment(payment.id).status == "pending"
        assert repo.get_payment(payment.id).reviewed_by is None
        assert [s.id for s in active_rows(db, user.id)] == [old.id]

    def test_subscription_lapses_once_its_window_has_passed(self, repo, user, admin_user):
        payment = payments.submit(repo, user.id, "daily", "ABC123")
        payments.approve(repo, payment.id, admin_user.id, now=utcnow() - timedelta(days=2))
        assert ledger.current_active(repo, user.id) is None
        assert access.evaluate(repo, user.id, "mock").allowed is False


class TestDecline:

    def test_decline_records_note_and_reviewer(self, repo, db, user, admin_user):
        payment = payments.submit(repo, user.id, "daily", "ABC123")

        payments.decline(repo, payment.id, admin_user.id, "  amount mismatch ")

        db.refresh(payment)
        assert payment.status == "declined"
        assert payment.review_note == "amount mismatch"
        assert payment.reviewed_by == admin_user.id
        assert db.query(Subscription).count() == 0

    def test_terminal_states_never_change(self, repo, db, user, admin_user):
        approved = payments.submit(repo, user.id, "daily", "APPROVE1")
        declined = payments.submit(repo, user.id, "daily", "DECLINE1")
        payments.approve(repo, approved.id, admin_user.id)
        payments.decline(repo, declined.id, admin_user.id, None)

        for payment_id in (approved.id, declined.id):
            with pytest.raises(InvalidState):
                payments.approve(repo, payment_id, admin_user.id)
            with pytest.raises(InvalidState):
                payments.decline(repo, payment_id, admin_user.id, "again")

        assert repo.get_payment(approved.id).status == "approved"
        assert repo.get_payment(declined.id).status == "declined"
        assert repo.get_payment(declined.id).review_note == ""

    def test_unknown_payment(self, repo, admin_user):
        with pytest.raises(NotFound):
            payments.decline(repo, 42, admin_user.id, "x")


class TestConcurrentApprovals:

    def test_racing_approvals_leave_one_active_subscription(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'race.db'}",
            connect_args={"check_same_thread": False},
            future=True,
        )
        Base.metadata.create_all(bind=engine)
        SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

        setup = SessionLocal()
        repo = SqlRepository(setup)
        with repo.transaction():
            owner = repo.add_user(User(name="U", email="u@example.com", password_hash="x", role="user"))
            reviewer = repo.add_user(User(name="A", email="a@example.com", password_hash="x", role="admin"))
        ids = [payments.submit(repo, owner.id, key, f"RACE-{key}").id for key in ("weekly", "monthly", "daily")]
        owner_id, reviewer_id = owner.id, reviewer.id
        setup.close()

        barrier = threading.Barrier(len(ids))
        errors = []

        def _approve(payment_id):
            session = SessionLocal()
            try:
                barrier.wait()
                payments.approve(SqlRepository(session), payment_id, reviewer_id)
            except Exception as exc:
                errors.append(exc)
            finally:
                session.close()

        threads = [threading.Thread(target=_approve, args=(pid,)) for pid in ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        check = SessionLocal()
        try:
            assert errors == []
            subs = check.query(Subscription).filter(Subscription.user_id == owner_id).all()
            assert len(subs) == 3
            assert len([s for s in subs if s.status == "active"]) == 1
            assert check.query(Payment).filter(Payment.status == "approved").count() == 3
        finally:
            check.close()
            engine.dispose()
