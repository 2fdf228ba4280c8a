"""Tests for the forgot / reset password workflow."""
from datetime import datetime, timedelta, timezone

from roleplay.exceptions import MailDeliveryError
from roleplay.models.password_reset_token import PasswordResetToken
from roleplay.services.auth_service import verify_password
from roleplay.models.user import User
from tests.conftest import create_test_user, login


def _issue_token(db, user_id: int, token: str = "token", age: timedelta = timedelta(0)) -> str:
    db.add(PasswordResetToken(user_id=user_id, token=token, created_at=datetime.now(timezone.utc) - age))
    db.commit()
    return token


class TestForgotPassword:

    def test_sends_email_with_instructions(self, client, mailer):
        user = create_test_user(client, username="alice")
        resp = client.post("/forgot-password", json={
            "email": user["email"],
            "resetPasswordUrl": "https://example.com/reset",
        })
        assert resp.status_code == 204

        message = mailer.find(user["email"])
        assert message is not None
        assert message.subject == "Roleplay: password recovery"
        assert "Hi alice," in message.html
        assert "2 hours" in message.html
        assert "https://example.com/reset?token=" in message.html

    def test_creates_reset_token(self, client, db, mailer):
        user = create_test_user(client, username="alice")
        client.post("/forgot-password", json={"email": user["email"], "resetPasswordUrl": "url"})

        tokens = db.query(PasswordResetToken).filter(PasswordResetToken.user_id == user["id"]).all()
        assert len(tokens) == 1
        assert len(tokens[0].token) == 48  # 24 random bytes, hex encoded
        assert f"url?token={tokens[0].token}" in mailer.sent[0].text

    def test_reissue_replaces_previous_token(self, client, db):
        user = create_test_user(client, username="alice")
        client.post("/forgot-password", json={"email": user["email"], "resetPasswordUrl": "url"})
        first = db.query(PasswordResetToken).one().token
        db.commit()

        client.post("/forgot-password", json={"email": user["email"], "resetPasswordUrl": "url"})
        tokens = db.query(PasswordResetToken).all()
        assert len(tokens) == 1
        assert tokens[0].token != first

    def test_invalid_data(self, client):
        resp = client.post("/forgot-password", json={"email": "", "resetPasswordUrl": ""})
        assert resp.status_code == 422
        assert resp.json()["code"] == "BAD_REQUEST"
        assert resp.json()["status"] == 422

    def test_unknown_email(self, client, mailer):
        resp = client.post("/forgot-password", json={"email": "nobody@test.com", "resetPasswordUrl": "url"})
        assert resp.status_code == 404
        assert mailer.sent == []

    def test_delivery_failure_is_reported(self, client, mailer, monkeypatch):
        user = create_test_user(client, username="alice")

        async def _fail(message):
            raise MailDeliveryError("Failed to send email: connection refused")

        monkeypatch.setattr(mailer, "send", _fail)
        resp = client.post("/forgot-password", json={"email": user["email"], "resetPasswordUrl": "url"})
        assert resp.status_code == 503
        assert resp.json()["code"] == "MAIL_DELIVERY_FAILED"


class TestResetPassword:

    def test_reset_password(self, client, db):
        user = create_test_user(client, username="alice")
        token = _issue_token(db, user["id"])

        resp = client.post("/reset-password", json={"token": token, "password": "123456"})
        assert resp.status_code == 204

        db.expire_all()
        stored = db.query(User).filter(User.id == user["id"]).one()
        assert verify_password("123456", stored.password_hash)
        login(client, user["email"], "123456")

    def test_invalid_data(self, client):
        resp = client.post("/reset-password", json={"token": "", "password": ""})
        assert resp.status_code == 422
        assert resp.json()["code"] == "BAD_REQUEST"

    def test_token_is_single_use(self, client, db):
        user = create_test_user(client, username="alice")
        token = _issue_token(db, user["id"])

        client.post("/reset-password", json={"token": token, "password": "123456"})
        second = client.post("/reset-password", json={"token": token, "password": "12345"})

        assert second.status_code == 404
        assert second.json() == {"message": "token not found", "code": "BAD_REQUEST", "status": 404}
        db.expire_all()
        stored = db.query(User).filter(User.id == user["id"]).one()
        assert not verify_password("12345", stored.password_hash)

    def test_token_expired_after_two_hours(self, client, db):
        user = create_test_user(client, username="alice")
        token = _issue_token(db, user["id"], age=timedelta(hours=2, minutes=1))

        resp = client.post("/reset-password", json={"token": token, "password": "123456"})
        assert resp.status_code == 410
        assert resp.json()["code"] == "TOKEN_EXPIRED"
        assert resp.json()["status"] == 410

    def test_expired_token_is_consumed(self, client, db):
        user = create_test_user(client, username="alice")
        token = _issue_token(db, user["id"], age=timedelta(hours=3))

        first = client.post("/reset-password", json={"token": token, "password": "123456"})
        assert first.status_code == 410

        db.expire_all()
        assert db.query(PasswordResetToken).count() == 0
        second = client.post("/reset-password", json={"token": token, "password": "123456"})
        assert second.status_code == 404

    def test_token_valid_just_under_two_hours(self, client, db):
        user = create_test_user(client, username="alice")
        token = _issue_token(db, user["id"], age=timedelta(hours=1, minutes=59))

        resp = client.post("/reset-password", json={"token": token, "password": "123456"})
        assert resp.status_code == 204
