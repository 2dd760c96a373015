import importlib.util
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from conftest import payment_body
from yookassa_checkout.core.errors import CheckoutError
from yookassa_checkout.core.models import payment_factory

SCRIPT = Path(__file__).resolve().parents[2] / "examples" / "create_payment.py"


@pytest.fixture
def script(monkeypatch, tmp_path):
    spec = importlib.util.spec_from_file_location("create_payment_example", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module.time, "sleep", lambda _: None)
    monkeypatch.setattr(
        "sys.argv",
        [
            "create_payment.py",
            "--env-file",
            str(tmp_path / "absent.env"),
            "--set",
            "YOOKASSA_SHOP_ID=123",
            "--set",
            "YOOKASSA_API_KEY=key",
            "--max-polls",
            "3",
        ],
    )
    return module


@pytest.mark.unit
def test_status_check_failure_returns_one(script, monkeypatch):
    client = MagicMock()
    client.create_payment.return_value = payment_factory(payment_body(status="pending"))
    client.get_payment.side_effect = CheckoutError("Connection reset")
    monkeypatch.setattr(script, "create_checkout_client", lambda config: client)

    assert script.main() == 1
    client.capture_payment.assert_not_called()


@pytest.mark.unit
def test_captures_once_payer_confirms(script, monkeypatch):
    client = MagicMock()
    client.create_payment.return_value = payment_factory(payment_body(payment_id="pay-1"))
    client.get_payment.return_value = payment_factory(
        payment_body(payment_id="pay-1", status="waiting_for_capture")
    )
    client.capture_payment.return_value = payment_factory(
        payment_body(payment_id="pay-1", status="succeeded")
    )
    monkeypatch.setattr(script, "create_checkout_client", lambda config: client)

    assert script.main() == 0
    client.capture_payment.assert_called_once_with("pay-1", idempotence_key="capture-pay-1")
