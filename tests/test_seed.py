from app import seed
from app.core.config import settings
from app.models.account import Account
from app.models.destination import Destination


def test_seed_is_idempotent(session_factory, db, monkeypatch):
    monkeypatch.setattr(settings, "SEED_ADMIN_EMAIL", "root@tourbirth.test")
    monkeypatch.setattr(settings, "SEED_ADMIN_PASSWORD", "rootpass123")

    seed.run(session_factory())
    seed.run(session_factory())

    admins = db.query(Account).filter(Account.email == "root@tourbirth.test").all()
    assert len(admins) == 1
    assert admins[0].role == "admin"
    assert db.query(Destination).count() == len(seed.DESTINATIONS)


def test_seed_without_admin_settings_only_adds_destinations(session_factory, db, monkeypatch):
    monkeypatch.setattr(settings, "SEED_ADMIN_EMAIL", "")
    seed.run(session_factory())
    assert db.query(Account).count() == 0
    assert db.query(Destination).filter(Destination.city == "cape town").count() == 1


def test_run_closes_the_session_it_is_given(session_factory, monkeypatch):
    session = session_factory()
    closed = []
    monkeypatch.setattr(session, "close", lambda: closed.append(True))
    seed.run(session)
    assert closed == [True]
