"""Unit tests for the resource-bound operations."""
from datetime import datetime, timezone

import pytest

from processout.core.client import APIError, ResponseDecodeError
from processout.core.models import AuthorizationRequest, Customer, Project, Token
from processout.core.options import RequestOptions


AUTHORIZATION_REQUEST = {
    "id": "auth_req_1",
    "project": {"id": "proj_test", "name": "Shop"},
    "customer": {"id": "cust_1", "email": "jo@example.com"},
    "url": "https://checkout.example.test/auth_req_1",
    "name": "Card authorization",
    "currency": "EUR",
    "return_url": "https://shop.example.test/ok",
    "cancel_url": "https://shop.example.test/cancel",
    "custom": "order-42",
    "sandbox": True,
    "created_at": "2024-03-01T10:20:30Z",
}


class TestAuthorizationRequests:
    def test_find(self, client, session, respond):
        respond({"success": True, "authorization_request": AUTHORIZATION_REQUEST})

        record = client.authorization_requests.find("auth_req_1")

        args, _ = session.request.call_args
        assert args == ("GET", "https://api.example.test/authorization-requests/auth_req_1")
        assert record.id == "auth_req_1"
        assert record.currency == "EUR"
        assert record.sandbox is True
        assert record.project == Project(id="proj_test", name="Shop")
        assert record.customer.email == "jo@example.com"
        assert record.created_at == datetime(2024, 3, 1, 10, 20, 30, tzinfo=timezone.utc)

    def test_find_escapes_id(self, client, session, respond):
        respond({"success": True, "authorization_request": {"id": "a b"}})

        client.authorization_requests.find("a b/../x")

        args, _ = session.request.call_args
        assert args[1] == "https://api.example.test/authorization-requests/a+b%2F..%2Fx"

    def test_create_serializes_fields(self, client, session, respond):
        respond({"success": True, "authorization_request": AUTHORIZATION_REQUEST})
        draft = AuthorizationRequest(
            name="Card authorization",
            currency="EUR",
            return_url="https://shop.example.test/ok",
            cancel_url="https://shop.example.test/cancel",
            custom="order-42",
        )

        record = client.authorization_requests.create(
            draft,
            "cust_1",
            options=RequestOptions(expand=("customer",), idempotency_key="k-1"),
        )

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://api.example.test/authorization-requests")
        assert kwargs["json"] == {
            "name": "Card authorization",
            "currency": "EUR",
            "return_url": "https://shop.example.test/ok",
            "cancel_url": "https://shop.example.test/cancel",
            "custom": "order-42",
            "customer_id": "cust_1",
            "expand": ["customer"],
        }
        assert kwargs["headers"]["Idempotency-Key"] == "k-1"
        assert record.url == "https://checkout.example.test/auth_req_1"

    def test_customer(self, client, session, respond):
        respond({"success": True, "customer": {"id": "cust_1", "first_name": "Jo"}})

        customer = client.authorization_requests.customer(AuthorizationRequest(id="auth_req_1"))

        args, _ = session.request.call_args
        assert args == (
            "GET",
            "https://api.example.test/authorization-requests/auth_req_1/customers",
        )
        assert customer.first_name == "Jo"

    def test_authorize(self, client, session, respond):
        respond({"success": True, "token": {"id": "tok_1", "customer_id": "cust_1"}})

        token = client.authorization_requests.authorize(
            AuthorizationRequest(id="auth_req_1"), "stripe live", "Main card", "gway_tok"
        )

        args, kwargs = session.request.call_args
        assert args == (
            "POST",
            "https://api.example.test/authorization-requests/auth_req_1"
            "/gateways/stripe+live/tokens",
        )
        assert kwargs["json"] == {"name": "Main card", "token": "gway_tok", "expand": []}
        assert token == Token(id="tok_1", customer_id="cust_1")

    def test_operations_on_unsaved_record_are_rejected(self, client, session):
        with pytest.raises(ValueError, match="must have an id"):
            client.authorization_requests.customer(AuthorizationRequest())
        session.request.assert_not_called()

    def test_api_failure_surfaces_message(self, client, respond):
        respond({"success": False, "message": "The customer could not be found."}, 404)

        with pytest.raises(APIError, match="could not be found"):
            client.authorization_requests.create(AuthorizationRequest(name="x"), "cust_missing")

    def test_bad_timestamp_raises_decode_error(self, client, respond):
        respond({"success": True, "authorization_request": {"id": "a", "created_at": "soon"}})

        with pytest.raises(ResponseDecodeError, match="AuthorizationRequest") as exc_info:
            client.authorization_requests.find("a")

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_non_object_resource_raises_decode_error(self, client, respond):
        respond({"success": True, "authorization_request": "auth_req_1"})

        with pytest.raises(ResponseDecodeError, match="JSON object"):
            client.authorization_requests.find("auth_req_1")


class TestCustomers:
    def test_all(self, client, session, respond):
        respond({"success": True, "customers": [{"id": "cust_1"}, {"id": "cust_2"}]})

        customers = client.customers.all()

        assert [c.id for c in customers] == ["cust_1", "cust_2"]
        assert session.request.call_args.args == ("GET", "https://api.example.test/customers")

    def test_all_with_empty_list(self, client, respond):
        respond({"success": True, "customers": None})

        assert client.customers.all() == []

    def test_all_with_undecodable_item(self, client, respond):
        respond({"success": True, "customers": [{"id": "c1"}, {"id": "c2", "created_at": "x"}]})

        with pytest.raises(ResponseDecodeError, match="Customer"):
            client.customers.all()

    def test_create_sends_writable_fields(self, client, session, respond):
        respond({"success": True, "customer": {"id": "cust_9", "email": "a@b.c"}})

        created = client.customers.create(
            Customer(id="ignored", email="a@b.c", first_name="A", metadata={"tier": "gold"})
        )

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://api.example.test/customers")
        body = kwargs["json"]
        assert "id" not in body
        assert body["email"] == "a@b.c"
        assert body["metadata"] == {"tier": "gold"}
        assert body["expand"] == []
        assert created.id == "cust_9"

    def test_find(self, client, session, respond):
        respond({"success": True, "customer": {"id": "cust_1", "balance": "10.00"}})

        customer = client.customers.find("cust_1")

        assert session.request.call_args.args[1] == "https://api.example.test/customers/cust_1"
        assert customer.balance == "10.00"

    def test_save_uses_put(self, client, session, respond):
        respond({"success": True, "customer": {"id": "cust_1", "city": "Paris"}})

        saved = client.customers.save(Customer(id="cust_1", city="Paris"))

        args, kwargs = session.request.call_args
        assert args == ("PUT", "https://api.example.test/customers/cust_1")
        assert kwargs["json"]["city"] == "Paris"
        assert saved.city == "Paris"

    def test_delete(self, client, session, respond):
        respond({"success": True})

        assert client.customers.delete(Customer(id="cust_1")) is None

        args, kwargs = session.request.call_args
        assert args == ("DELETE", "https://api.example.test/customers/cust_1")
        assert "json" not in kwargs

    def test_tokens(self, client, session, respond):
        respond({"success": True, "tokens": [{"id": "tok_1", "is_default": True}]})

        tokens = client.customers.tokens(Customer(id="cust_1"))

        assert session.request.call_args.args[1] == (
            "https://api.example.test/customers/cust_1/tokens"
        )
        assert tokens[0].is_default is True


class TestTokens:
    def test_find(self, client, session, respond):
        respond({"success": True, "token": {"id": "tok_1", "type": "card"}})

        token = client.tokens.find("cust_1", "tok_1")

        assert session.request.call_args.args == (
            "GET",
            "https://api.example.test/customers/cust_1/tokens/tok_1",
        )
        assert token.type == "card"

    def test_create(self, client, session, respond):
        respond({"success": True, "token": {"id": "tok_2", "card_id": "card_1"}})

        token = client.tokens.create("cust_1", "card_1", metadata={"k": "v"})

        args, kwargs = session.request.call_args
        assert args == ("POST", "https://api.example.test/customers/cust_1/tokens")
        assert kwargs["json"] == {"source": "card_1", "metadata": {"k": "v"}, "expand": []}
        assert token.card_id == "card_1"

    def test_delete(self, client, session, respond):
        respond({"success": True})

        client.tokens.delete("cust_1", "tok_1")

        assert session.request.call_args.args == (
            "DELETE",
            "https://api.example.test/customers/cust_1/tokens/tok_1",
        )


class TestProjects:
    def test_current(self, client, session, respond):
        respond({"success": True, "project": {"id": "proj_test", "name": "Shop"}})

        project = client.projects.current()

        assert session.request.call_args.args[1] == "https://api.example.test/projects/this"
        assert project.name == "Shop"
