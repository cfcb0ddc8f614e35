"""Tests for SendOptions and LogRecord models."""

import pytest
from pydantic import ValidationError

from jsonsyslog_common.models import LogRecord, ReceivedLine, SendOptions


class TestSendOptionsDefaults:
    def test_defaults(self):
        opts = SendOptions()
        assert opts.service == "GenericService"
        assert opts.process == "GenericProcess"
        assert opts.action == "unspecified"
        assert opts.result == "undefined"
        assert opts.message == "generic message"
        assert opts.category == "undefined"
        assert opts.host == "127.0.0.1"
        assert opts.port == 514
        assert opts.user is None
        assert opts.server_name is None
        assert opts.timeout_seconds is None

    def test_frozen(self):
        opts = SendOptions()
        with pytest.raises(ValidationError):
            opts.port = 1234


class TestSendOptionsValidation:
    def test_port_must_be_positive(self):
        with pytest.raises(ValidationError):
            SendOptions(port=0)

    def test_port_has_no_upper_bound(self):
        assert SendOptions(port=70000).port == 70000

    def test_empty_host_rejected(self):
        with pytest.raises(ValidationError):
            SendOptions(host="")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            SendOptions(timeout_seconds=0)

    def test_none_means_default(self):
        opts = SendOptions(service=None, message=None, host=None, port=None)
        assert opts.service == "GenericService"
        assert opts.message == "generic message"
        assert opts.host == "127.0.0.1"
        assert opts.port == 514

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            SendOptions(syslog_host="10.0.0.1")


class TestLogRecord:
    def test_key_order(self):
        rec = LogRecord(
            timestamp="2025-07-20T11:24:00Z",
            service="s",
            process="p",
            server="h",
            action="a",
            result="r",
            message="m",
            category="c",
            user="u",
        )
        assert list(rec.model_dump()) == [
            "timestamp",
            "service",
            "process",
            "server",
            "action",
            "result",
            "message",
            "category",
            "user",
            "version",
        ]
        assert rec.version == "1.0"

    def test_rejects_non_string_json_values(self):
        raw = (
            '{"timestamp":"t","service":"s","process":"p","server":"h","action":"a",'
            '"result":"r","message":"m","category":"c","user":"u","version":1.0}'
        )
        with pytest.raises(ValidationError):
            LogRecord.model_validate_json(raw)


class TestReceivedLine:
    def test_as_record(self):
        raw = (
            '{"timestamp":"t","service":"s","process":"p","server":"h","action":"a",'
            '"result":"r","message":"m","category":"c","user":"u","version":"1.0"}'
        )
        line = ReceivedLine(raw=raw, remote_addr="127.0.0.1:1", connection_id=1)
        assert line.as_record().service == "s"
        assert line.as_json_dict()["version"] == "1.0"
