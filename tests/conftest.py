import json

import pytest
import requests
from unittest.mock import MagicMock

from yookassa_checkout.core.client import CheckoutClient
from yookassa_checkout.core.config import CheckoutConfig


SHOP_ID = "123456"
API_KEY = "test_secret_key"


def make_response(body=None, status_code=200, raw=None):
    """Build a real ``requests.Response`` carrying ``body`` as JSON."""
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://api.yookassa.ru/v3/test"
    if raw is not None:
        response._content = raw
    else:
        response._content = json.dumps(body if body is not None else {}).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    return response


def payment_body(payment_id="2c5d3c5e-000f-5000-8000-1b6a5f1e1a10", status="pending", **extra):
    body = {
        "id": payment_id,
        "status": status,
        "paid": status == "succeeded",
        "amount": {"value": "100.00", "currency": "RUB"},
        "created_at": "2024-01-01T10:00:00.000Z",
        "description": "Order #1",
        "metadata": {"order_id": "1"},
        "recipient": {"account_id": SHOP_ID, "gateway_id": "100500"},
        "refundable": False,
        "test": True,
    }
    body.update(extra)
    return body


def refund_body(refund_id="2c5d3c5e-0015-5000-9000-1b6a5f1e1a10", status="succeeded", **extra):
    body = {
        "id": refund_id,
        "status": status,
        "payment_id": "2c5d3c5e-000f-5000-8000-1b6a5f1e1a10",
        "amount": {"value": "50.00", "currency": "RUB"},
        "created_at": "2024-01-02T10:00:00.000Z",
    }
    body.update(extra)
    return body


def receipt_body(receipt_id="rt-2c5d3c5e-0015-5000-a000-1b6a5f1e1a10", status="pending", **extra):
    body = {
        "id": receipt_id,
        "type": "payment",
        "status": status,
        "payment_id": "2c5d3c5e-000f-5000-8000-1b6a5f1e1a10",
    }
    body.update(extra)
    return body


@pytest.fixture
def config():
    return CheckoutConfig(shop_id=SHOP_ID, api_key=API_KEY)


@pytest.fixture
def session():
    mock = MagicMock(spec=requests.Session)
    mock.request.return_value = make_response(payment_body())
    return mock


@pytest.fixture
def client(config, session):
    return CheckoutClient(config, session=session)
