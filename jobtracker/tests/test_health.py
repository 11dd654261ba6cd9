from sqlalchemy.exc import OperationalError


def test_health_reports_database_ok(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "ok"}


def test_health_is_503_when_database_is_down(client, db_session, monkeypatch):
    def unreachable(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))

    monkeypatch.setattr(db_session, "execute", unreachable)
    r = client.get("/health")
    assert r.status_code == 503
    assert r.json()["detail"] == "Database connection error"
