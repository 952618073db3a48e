"""
Tests for EmailGatewayClient.

Focus on the client's contract with calling code: what goes over the wire
and which failures surface as EmailGatewayError.
"""

import json

import pytest
import requests
import responses

from clients.email_client import EmailGatewayClient, EmailGatewayError

GATEWAY_URL = "https://gateway.example.com/send"


@pytest.fixture
def client():
    """Create client with test credentials."""
    return EmailGatewayClient(
        gateway_url=GATEWAY_URL,
        api_key="test-api-key",
        hmac_secret="test-hmac-secret",
    )


class TestEmailGatewayClientInit:
    """Test client initialization - fail-fast on invalid config."""

    def test_init_with_valid_credentials(self, client):
        """Client initializes with all required credentials."""
        assert client.gateway_url == GATEWAY_URL

    def test_init_rejects_empty_gateway_url(self):
        """Empty gateway_url raises ValueError."""
        with pytest.raises(ValueError, match="gateway_url"):
            EmailGatewayClient(gateway_url="", api_key="k", hmac_secret="s")

    def test_init_rejects_empty_api_key(self):
        """Empty api_key raises ValueError."""
        with pytest.raises(ValueError, match="api_key"):
            EmailGatewayClient(gateway_url=GATEWAY_URL, api_key="", hmac_secret="s")

    def test_init_rejects_empty_hmac_secret(self):
        """Empty hmac_secret raises ValueError."""
        with pytest.raises(ValueError, match="hmac_secret"):
            EmailGatewayClient(gateway_url=GATEWAY_URL, api_key="k", hmac_secret="")


class TestSendHtmlEmail:
    """Test send_html_email - uses responses library for HTTP mocking."""

    @responses.activate
    def test_successful_send_returns_none(self, client):
        """Successful gateway response completes without exception."""
        responses.add(responses.POST, GATEWAY_URL, json={"success": True}, status=200)

        result = client.send_html_email(
            to="priya@fashionbrand.com",
            subject="Invoice INV-0001 from Canvas Cartel",
            html="<p>Hi</p>",
        )
        assert result is None

    @responses.activate
    def test_payload_and_headers(self, client):
        """Body is the html payload; headers carry the API key and its HMAC."""
        responses.add(responses.POST, GATEWAY_URL, json={"success": True}, status=200)

        client.send_html_email(to="a@b.in", subject="S", html="<p>H</p>", sender="auth")

        request = responses.calls[0].request
        body = request.body.decode("utf-8")
        assert json.loads(body) == {
            "type": "html",
            "email": "a@b.in",
            "subject": "S",
            "html": "<p>H</p>",
            "sender": "auth",
        }
        assert request.headers["X-API-Key"] == "test-api-key"
        assert request.headers["X-Signature"] == client.sign(body)

    @responses.activate
    def test_from_name_and_reply_to(self, client):
        responses.add(responses.POST, GATEWAY_URL, json={"success": True}, status=200)

        client.send_html_email(
            to="a@b.in", subject="S", html="H",
            from_name="Canvas Cartel", reply_to="hello@canvascartel.in",
        )

        body = json.loads(responses.calls[0].request.body)
        assert body["from_name"] == "Canvas Cartel"
        assert body["reply_to"] == "hello@canvascartel.in"

    def test_signature_is_deterministic(self, client):
        assert client.sign('{"a":1}') == client.sign('{"a":1}')
        assert client.sign('{"a":1}') != client.sign('{"a":2}')

    def test_invalid_sender_raises_value_error(self, client):
        """Invalid sender value raises ValueError before any HTTP call."""
        with pytest.raises(ValueError, match="sender must be"):
            client.send_html_email(to="a@b.in", subject="S", html="H", sender="invalid")

    @responses.activate
    def test_gateway_500_raises_error(self, client):
        """Server error from gateway raises EmailGatewayError."""
        responses.add(
            responses.POST, GATEWAY_URL,
            json={"success": False, "message": "Internal error"}, status=500,
        )

        with pytest.raises(EmailGatewayError, match="Internal error"):
            client.send_html_email(to="a@b.in", subject="S", html="H")

    @responses.activate
    def test_gateway_success_false_raises_error(self, client):
        """Gateway returns 200 but success=false raises EmailGatewayError."""
        responses.add(
            responses.POST, GATEWAY_URL,
            json={"success": False, "message": "Invalid email"}, status=200,
        )

        with pytest.raises(EmailGatewayError, match="Invalid email"):
            client.send_html_email(to="invalid", subject="S", html="H")

    @responses.activate
    def test_connection_failure_raises_error(self, client):
        """Network failure raises EmailGatewayError."""
        responses.add(
            responses.POST, GATEWAY_URL,
            body=requests.exceptions.ConnectionError("Network unreachable"),
        )

        with pytest.raises(EmailGatewayError, match="Connection failed"):
            client.send_html_email(to="a@b.in", subject="S", html="H")

    @responses.activate
    def test_invalid_json_response_raises_error(self, client):
        """Non-JSON response raises EmailGatewayError."""
        responses.add(responses.POST, GATEWAY_URL, body="not json", status=200)

        with pytest.raises(EmailGatewayError, match="Invalid response"):
            client.send_html_email(to="a@b.in", subject="S", html="H")
