"""Tests for the /api/vapi proxy routes."""

import json

import httpx
from fastapi import status

from callboard.application.services.vapi_service import search_calls

PROVIDER_CALLS = [
    {
        "id": "call-aaa",
        "customer": {"number": "+15551234567", "name": "Sarah Johnson"},
        "assistant": {"name": "Sales Girl"},
    },
    {
        "id": "call-bbb",
        "customer": {"number": "+447911123456", "name": "Michael Chen"},
        "assistant": {"name": "Support Bot"},
    },
    {"id": "call-ccc"},
]


def save_settings(client, headers, **fields):
    response = client.put("/api/settings", headers=headers, json=fields)
    assert response.status_code == status.HTTP_200_OK


def test_proxy_requires_auth(client):
    assert client.get("/api/vapi/calls").status_code == status.HTTP_401_UNAUTHORIZED


def test_user_key_is_used(client, auth_headers, vapi_mock, settings_env):
    settings_env(VAPI_PRIVATE_KEY="sk-default")
    save_settings(client, auth_headers, vapiPrivateKey="sk-user")
    route = vapi_mock.get("/call").mock(return_value=httpx.Response(200, json=PROVIDER_CALLS))

    response = client.get("/api/vapi/calls", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == PROVIDER_CALLS
    assert route.calls.last.request.headers["Authorization"] == "Bearer sk-user"


def test_default_key_is_the_fallback(client, auth_headers, vapi_mock, settings_env):
    settings_env(VAPI_PRIVATE_KEY="sk-default")
    route = vapi_mock.get("/call/call-aaa").mock(return_value=httpx.Response(200, json=PROVIDER_CALLS[0]))

    response = client.get("/api/vapi/calls/call-aaa", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert route.calls.last.request.headers["Authorization"] == "Bearer sk-default"


def test_no_key_anywhere_is_a_configuration_error(client, auth_headers, vapi_mock):
    route = vapi_mock.get("/call").mock(return_value=httpx.Response(200, json=[]))

    response = client.get("/api/vapi/calls", headers=auth_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    error = response.json()["error"]
    assert error["code"] == "ProviderNotConfiguredError"
    assert error["message"] == "VAPI private key missing. Please configure in settings."
    assert not route.called


def test_provider_error_is_passed_through(client, auth_headers, vapi_mock):
    save_settings(client, auth_headers, vapiPrivateKey="sk-user")
    vapi_mock.get("/call").mock(return_value=httpx.Response(401, json={"message": "Invalid Key"}))

    response = client.get("/api/vapi/calls", headers=auth_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    error = response.json()["error"]
    assert error["code"] == "VapiAPIError"
    assert error["details"]["status"] == 401
    assert error["details"]["statusText"] == "Unauthorized"
    assert "Invalid Key" in error["details"]["body"]


class TestCreateCall:
    def test_create_call_with_user_defaults(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user", assistantId="asst-1", phoneNumberId="pn-1")
        route = vapi_mock.post("/call").mock(return_value=httpx.Response(201, json={"id": "new-call"}))

        response = client.post("/api/vapi/calls", headers=auth_headers, json={"phoneNumber": "555-123-4567"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": "new-call"}
        assert json.loads(route.calls.last.request.content) == {
            "phoneNumberId": "pn-1",
            "assistantId": "asst-1",
            "customer": {"number": "+15551234567"},
        }

    def test_phone_number_is_required(self, client, auth_headers):
        response = client.post("/api/vapi/calls", headers=auth_headers, json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_outbound_not_enabled(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user")
        vapi_mock.post("/call").mock(
            return_value=httpx.Response(400, json={"message": "Can't Dial Outbound Yet. Contact support."})
        )

        response = client.post("/api/vapi/calls", headers=auth_headers, json={"phoneNumber": "5551234567"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "Outbound calling not enabled"

    def test_invalid_number_format(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user")
        vapi_mock.post("/call").mock(
            return_value=httpx.Response(
                400, json={"message": ["customer.number must be a valid phone number in the E.164 format"]}
            )
        )

        response = client.post("/api/vapi/calls", headers=auth_headers, json={"phoneNumber": "12"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"]["message"] == "Invalid phone number format"

    def test_other_provider_errors_are_500(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user")
        vapi_mock.post("/call").mock(return_value=httpx.Response(502, text="bad gateway"))

        response = client.post("/api/vapi/calls", headers=auth_headers, json={"phoneNumber": "5551234567"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["error"]["message"].startswith("VAPI API error: 502")


def test_delete_call_is_proxied(client, auth_headers, vapi_mock):
    save_settings(client, auth_headers, vapiPrivateKey="sk-user")
    route = vapi_mock.delete("/call/call-aaa").mock(return_value=httpx.Response(200, json={"id": "call-aaa"}))

    response = client.delete("/api/vapi/calls/call-aaa", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"id": "call-aaa"}
    assert route.calls.last.request.headers["Authorization"] == "Bearer sk-user"


class TestAssistantAndPhone:
    def test_assistant_defaults_to_user_setting(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user", assistantId="asst-1")
        route = vapi_mock.get("/assistant/asst-1").mock(return_value=httpx.Response(200, json={"id": "asst-1"}))

        response = client.get("/api/vapi/assistant", headers=auth_headers)

        assert response.status_code == status.HTTP_200_OK
        assert route.called

    def test_assistant_by_explicit_id(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user", assistantId="asst-1")
        route = vapi_mock.get("/assistant/asst-9").mock(return_value=httpx.Response(200, json={"id": "asst-9"}))

        response = client.get("/api/vapi/assistant/asst-9", headers=auth_headers)

        assert response.json() == {"id": "asst-9"}
        assert route.called

    def test_update_assistant(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user")
        route = vapi_mock.patch("/assistant/asst-1").mock(
            return_value=httpx.Response(200, json={"id": "asst-1", "firstMessage": "Hi!"})
        )

        response = client.patch("/api/vapi/assistant/asst-1", headers=auth_headers, json={"firstMessage": "Hi!"})

        assert response.status_code == status.HTTP_200_OK
        assert json.loads(route.calls.last.request.content) == {"firstMessage": "Hi!"}

    def test_phone_defaults_to_user_setting(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user", phoneNumberId="pn-1")
        route = vapi_mock.get("/phone-number/pn-1").mock(return_value=httpx.Response(200, json={"id": "pn-1"}))

        response = client.get("/api/vapi/phone", headers=auth_headers)

        assert response.json() == {"id": "pn-1"}
        assert route.called

    def test_phone_without_any_id(self, client, auth_headers):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user")

        response = client.get("/api/vapi/phone", headers=auth_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestSearch:
    def test_search_route_filters_provider_calls(self, client, auth_headers, vapi_mock):
        save_settings(client, auth_headers, vapiPrivateKey="sk-user")
        vapi_mock.get("/call").mock(return_value=httpx.Response(200, json=PROVIDER_CALLS))

        response = client.get("/api/vapi/search", headers=auth_headers, params={"q": "sarah"})

        assert [c["id"] for c in response.json()] == ["call-aaa"]

    def test_matches_id_number_and_assistant(self):
        assert [c["id"] for c in search_calls(PROVIDER_CALLS, "BBB")] == ["call-bbb"]
        assert [c["id"] for c in search_calls(PROVIDER_CALLS, "7911")] == ["call-bbb"]
        assert [c["id"] for c in search_calls(PROVIDER_CALLS, "sales girl")] == ["call-aaa"]
        assert [c["id"] for c in search_calls(PROVIDER_CALLS, "call-")] == ["call-aaa", "call-bbb", "call-ccc"]

    def test_empty_query_returns_everything(self):
        assert search_calls(PROVIDER_CALLS, "") == PROVIDER_CALLS
        assert search_calls(PROVIDER_CALLS, None) == PROVIDER_CALLS

    def test_no_match(self):
        assert search_calls(PROVIDER_CALLS, "zzz") == []


def test_phone_without_key_or_id_is_a_configuration_error(client, auth_headers):
    response = client.get("/api/vapi/phone", headers=auth_headers)

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"]["code"] == "ProviderNotConfiguredError"
