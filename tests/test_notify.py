"""Tests for the Telnyx SMS notifier."""

import json

import httpx

from notify import SmsNotifier


def _notifier(handler, **kwargs):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    defaults = {"api_key": "KEY", "from_number": "+15550000000", "company_name": "Acme Corp"}
    return SmsNotifier(client=client, **{**defaults, **kwargs})


def test_send_posts_message():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"data": {"id": "msg-1", "parts": 1}})

    assert _notifier(handler).send("(555) 123-4567", "hello") is True
    request = seen[0]
    assert request.url == "https://api.telnyx.com/v2/messages"
    assert request.headers["Authorization"] == "Bearer KEY"
    assert json.loads(request.content) == {"from": "+15550000000", "to": "+15551234567", "text": "hello"}


def test_api_error_returns_false():
    def handler(request):
        return httpx.Response(422, json={"errors": [{"code": "40310", "title": "Invalid to"}]})

    assert _notifier(handler).send("+15551234567", "hello") is False


def test_transport_error_returns_false():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    assert _notifier(handler).send("+15551234567", "hello") is False


def test_non_json_success_body_still_counts():
    def handler(request):
        return httpx.Response(200, content=b"ok")

    assert _notifier(handler).send("+15551234567", "hello") is True


def test_unconfigured_or_bad_input_skips_request():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    assert _notifier(handler, api_key="").send("+15551234567", "hello") is False
    assert _notifier(handler).send("", "hello") is False
    assert _notifier(handler).send("+15551234567", "x" * 1601) is False
    assert calls == []


def test_templates():
    texts = []

    def handler(request):
        texts.append(json.loads(request.content)["text"])
        return httpx.Response(200, json={"data": {}})

    notifier = _notifier(handler, hr_contact_email="hr@acme.com")
    notifier.send_submitted("+15551234567")
    notifier.send_approved("+15551234567", "http://x/i9/1/pdf")
    notifier.send_correction_request("+15551234567", "Fix DOB")

    assert "submitted successfully" in texts[0]
    assert "http://x/i9/1/pdf" in texts[1]
    assert '"Fix DOB"' in texts[2]
    assert "hr@acme.com" in texts[2]
    assert all(t.endswith("- Acme Corp") for t in texts)
