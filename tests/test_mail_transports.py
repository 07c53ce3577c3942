import smtplib

import pytest
import requests

import app.services.mail as mail
from app.core.exceptions import DependencyError
from app.core.settings import settings
from app.services.mail import ConsoleMailTransport, SendGridMailTransport, SmtpMailTransport

RECIPIENTS = ["animal.control@city.gov"]


class FakeResponse:
    def __init__(self, status_code, headers=None, text=""):
        self.status_code = status_code
        self.headers = headers or {}
        self.text = text


def test_console_transport_returns_message_id():
    assert ConsoleMailTransport().send("subject", "body", RECIPIENTS).startswith("console-")


def test_sendgrid_requires_api_key():
    with pytest.raises(ValueError):
        SendGridMailTransport(api_key="", sender="alerts@streetdogalert.org")


def test_sendgrid_accepts_202(monkeypatch):
    transport = SendGridMailTransport(api_key="SG.test", sender="Street Dog Alert <alerts@streetdogalert.org>")
    captured = {}

    def fake_post(url, json, timeout):
        captured.update(url=url, json=json, timeout=timeout)
        return FakeResponse(202, headers={"X-Message-Id": "sg-1"})

    monkeypatch.setattr(transport.session, "post", fake_post)

    assert transport.send("High severity", "body", RECIPIENTS) == "sg-1"
    assert captured["url"] == SendGridMailTransport.BASE_URL
    assert captured["json"]["from"] == {"email": "alerts@streetdogalert.org", "name": "Street Dog Alert"}
    assert captured["json"]["personalizations"][0]["to"] == [{"email": "animal.control@city.gov"}]


def test_sendgrid_rejection_raises_dependency_error(monkeypatch):
    transport = SendGridMailTransport(api_key="SG.test", sender="alerts@streetdogalert.org")
    monkeypatch.setattr(transport.session, "post", lambda *a, **kw: FakeResponse(401, text="unauthorized"))

    with pytest.raises(DependencyError):
        transport.send("s", "b", RECIPIENTS)


def test_sendgrid_network_error_raises_dependency_error(monkeypatch):
    transport = SendGridMailTransport(api_key="SG.test", sender="alerts@streetdogalert.org")

    def fail(*args, **kwargs):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(transport.session, "post", fail)

    with pytest.raises(DependencyError):
        transport.send("s", "b", RECIPIENTS)


class FakeSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, username, password):
        self.calls.append(("login", username))

    def send_message(self, message):
        self.calls.append(("send", message["To"], message["Subject"]))


def test_smtp_requires_host():
    with pytest.raises(ValueError):
        SmtpMailTransport(host="")


def test_smtp_sends_with_tls_and_login(monkeypatch):
    FakeSMTP.instances = []
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    transport = SmtpMailTransport(host="smtp.sendgrid.net", username="apikey", password="secret")

    transport.send("High severity", "body", ["a@city.gov", "b@ngo.org"])

    smtp = FakeSMTP.instances[0]
    assert (smtp.host, smtp.port) == ("smtp.sendgrid.net", 587)
    assert smtp.calls == ["starttls", ("login", "apikey"), ("send", "a@city.gov, b@ngo.org", "High severity")]


def test_smtp_connection_failure_raises_dependency_error(monkeypatch):
    def refuse(*args, **kwargs):
        raise ConnectionRefusedError("refused")

    monkeypatch.setattr(smtplib, "SMTP", refuse)

    with pytest.raises(DependencyError):
        SmtpMailTransport(host="localhost", port=2525).send("s", "b", RECIPIENTS)


def test_misconfigured_transport_falls_back_to_console(monkeypatch):
    monkeypatch.setattr(mail, "_transport_instance", None)
    monkeypatch.setattr(settings, "MAIL_TRANSPORT", "sendgrid")
    monkeypatch.setattr(settings, "SENDGRID_API_KEY", None)

    assert isinstance(mail.get_mail_transport(), ConsoleMailTransport)


def test_smtp_transport_selected_from_settings(monkeypatch):
    monkeypatch.setattr(mail, "_transport_instance", None)
    monkeypatch.setattr(settings, "MAIL_TRANSPORT", "smtp")
    monkeypatch.setattr(settings, "SMTP_HOST", "smtp.city.gov")

    transport = mail.get_mail_transport()

    assert isinstance(transport, SmtpMailTransport)
    assert transport.host == "smtp.city.gov"
