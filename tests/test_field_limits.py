"""Tests for swinedroid.core.field_limits — truncation and port clamping."""

import pytest

from swinedroid.constants import MAX_FIELD_LENGTH, MAX_PORT
from swinedroid.core.field_limits import (
    clamp_port,
    sanitize_server_fields,
    truncate_field,
)


class TestTruncateField:
    def test_short_value_unchanged(self):
        assert truncate_field("example.com") == "example.com"

    def test_empty_value(self):
        assert truncate_field("") == ""

    @pytest.mark.parametrize("length", [127, 128, 200, 1000])
    def test_long_value_cut_to_limit(self, length):
        result = truncate_field("x" * length)
        assert len(result) == min(length, MAX_FIELD_LENGTH)

    def test_keeps_prefix(self):
        value = "abc" + "z" * 300
        assert truncate_field(value) == value[:127]


class TestClampPort:
    @pytest.mark.parametrize("port", [1, 22, 443, 8080, 65535])
    def test_valid_port_kept(self, port):
        assert clamp_port(port) == port

    @pytest.mark.parametrize("port", [0, -1, -65535, 65536, 70000])
    def test_out_of_range_becomes_max(self, port):
        assert clamp_port(port) == MAX_PORT


class TestSanitizeServerFields:
    def test_applies_all_rules(self):
        host, port, username, password = sanitize_server_fields(
            "h" * 200, 0, "u" * 128, "secret",
        )
        assert len(host) == 127
        assert port == 65535
        assert len(username) == 127
        assert password == "secret"

    def test_column_order(self):
        assert sanitize_server_fields("host", 22, "alice", "pw") == (
            "host", 22, "alice", "pw",
        )
