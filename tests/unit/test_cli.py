import io
import json
from unittest.mock import MagicMock

import pytest
import requests

from conftest import make_response, payment_body, refund_body
from yookassa_checkout.cli import build_parser, run_cli
from yookassa_checkout.core.constants import IDEMPOTENCE_HEADER

CREDENTIALS = ["--set", "YOOKASSA_SHOP_ID=123", "--set", "YOOKASSA_API_KEY=key"]


@pytest.fixture
def env_file(tmp_path):
    return ["--env-file", str(tmp_path / "absent.env")]


@pytest.fixture
def http():
    session = MagicMock(spec=requests.Session)
    session.request.return_value = make_response(payment_body(payment_id="pay-1"))
    return session


class TestRunCli:

    @pytest.mark.unit
    def test_get_payment_prints_raw_json(self, env_file, http):
        out = io.StringIO()
        code = run_cli([*env_file, *CREDENTIALS, "payment", "get", "pay-1"], session=http, stdout=out)
        assert code == 0
        assert json.loads(out.getvalue())["id"] == "pay-1"
        assert http.request.call_args.args == ("GET", "https://api.yookassa.ru/v3/payments/pay-1")

    @pytest.mark.unit
    def test_list_with_range_filter(self, env_file, http):
        http.request.return_value = make_response(
            {"type": "list", "items": [refund_body()], "next_cursor": "next"}
        )
        out = io.StringIO()
        code = run_cli(
            [
                *env_file,
                *CREDENTIALS,
                "refund",
                "list",
                "--filter",
                "created_at.gte=2024-01-01",
                "--filter",
                "status=succeeded",
            ],
            session=http,
            stdout=out,
        )
        assert code == 0
        assert http.request.call_args.args[1] == (
            "https://api.yookassa.ru/v3/refunds?created_at.gte=2024-01-01&status=succeeded"
        )
        rendered = json.loads(out.getvalue())
        assert rendered["next_cursor"] == "next"
        assert len(rendered["items"]) == 1

    @pytest.mark.unit
    def test_cancel_passes_idempotence_key(self, env_file, http):
        code = run_cli(
            [*env_file, *CREDENTIALS, "payment", "cancel", "pay-1", "--idempotence-key", "k-1"],
            session=http,
            stdout=io.StringIO(),
        )
        assert code == 0
        assert http.request.call_args.kwargs["headers"] == {IDEMPOTENCE_HEADER: "k-1"}

    @pytest.mark.unit
    def test_request_failure_returns_one(self, env_file, http):
        http.request.return_value = make_response({"description": "Payment not found"}, 404)
        out = io.StringIO()
        code = run_cli([*env_file, *CREDENTIALS, "payment", "get", "missing"], session=http, stdout=out)
        assert code == 1
        assert out.getvalue() == ""

    @pytest.mark.unit
    def test_missing_credentials_return_one(self, env_file, http, monkeypatch):
        monkeypatch.delenv("YOOKASSA_SHOP_ID", raising=False)
        monkeypatch.delenv("YOOKASSA_API_KEY", raising=False)
        code = run_cli([*env_file, "receipt", "get", "rt-1"], session=http, stdout=io.StringIO())
        assert code == 1
        http.request.assert_not_called()


class TestParser:

    @pytest.mark.unit
    def test_cancel_only_exists_for_payments(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["refund", "cancel", "rf-1"])

    @pytest.mark.unit
    def test_malformed_override_is_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--set", "NOEQUALS", "payment", "get", "x"])
