"""Tests for the crate document codec (core/codec.py).

Coverage:
* Document shape — four named fields, base64 payload.
* Decoding of legacy documents with the same field names.
* Case-insensitive keys and ignored unknown fields.
* Every malformed-document path raises ``DecodeError``.
"""

from __future__ import annotations

import json

import pytest

from cratectl.core.codec import (
    crate_to_document,
    decode_crate,
    document_to_crate,
    encode_crate,
    is_safe_component,
)
from cratectl.exceptions import DecodeError

from conftest import make_crate


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

class TestEncode:
    def test_document_has_exactly_four_named_fields(self) -> None:
        doc = crate_to_document(make_crate())
        assert set(doc) == {"ProjectName", "BinaryName", "BinaryFile", "SourceURL"}

    def test_payload_is_base64(self) -> None:
        doc = crate_to_document(make_crate(binary_payload=b"\x7fELF"))
        assert doc["BinaryFile"] == "f0VMRg=="

    def test_empty_source_url_kept(self) -> None:
        doc = crate_to_document(make_crate(source_url=""))
        assert doc["SourceURL"] == ""

    def test_encode_is_json_object(self) -> None:
        parsed = json.loads(encode_crate(make_crate()))
        assert isinstance(parsed, dict)
        assert parsed["ProjectName"] == "tool"


# ---------------------------------------------------------------------------
# Decoding: valid documents
# ---------------------------------------------------------------------------

class TestDecode:
    def test_reads_legacy_document(self) -> None:
        data = (
            '{"ProjectName":"tool","BinaryName":"tool-bin",'
            '"BinaryFile":"f0VMRg==","SourceURL":"https://example.com"}'
        )
        crate = decode_crate(data)
        assert crate.project_name == "tool"
        assert crate.binary_name == "tool-bin"
        assert crate.binary_payload == b"\x7fELF"
        assert crate.source_url == "https://example.com"

    def test_accepts_bytes(self) -> None:
        crate = decode_crate(encode_crate(make_crate()).encode("utf-8"))
        assert crate == make_crate()

    def test_keys_are_case_insensitive(self) -> None:
        data = '{"projectname":"tool","BINARYNAME":"tool","binaryFile":"AA==","sourceurl":""}'
        crate = decode_crate(data)
        assert crate.binary_payload == b"\x00"

    def test_unknown_fields_ignored(self) -> None:
        doc = crate_to_document(make_crate())
        doc["Checksum"] = "abc"
        assert document_to_crate(doc) == make_crate()

    def test_null_payload_decodes_to_empty(self) -> None:
        crate = decode_crate('{"ProjectName":"tool","BinaryName":"tool","BinaryFile":null}')
        assert crate.binary_payload == b""
        assert not crate.has_payload

    @pytest.mark.parametrize("name", ["team/tool", "", ".."])
    def test_project_name_not_path_checked(self, name: str) -> None:
        doc = crate_to_document(make_crate())
        doc["ProjectName"] = name
        assert document_to_crate(doc).project_name == name

    def test_missing_payload_and_url(self) -> None:
        crate = decode_crate('{"ProjectName":"tool","BinaryName":"tool"}')
        assert crate.binary_payload == b""
        assert crate.source_url == ""


# ---------------------------------------------------------------------------
# Decoding: malformed documents
# ---------------------------------------------------------------------------

class TestDecodeErrors:
    @pytest.mark.parametrize(
        "data",
        [
            "",
            "not json",
            "{",
            b"\x80\x81",
        ],
    )
    def test_invalid_json(self, data: str | bytes) -> None:
        with pytest.raises(DecodeError, match="not valid JSON"):
            decode_crate(data)

    @pytest.mark.parametrize("data", ["[]", '"tool"', "42", "null"])
    def test_not_an_object(self, data: str) -> None:
        with pytest.raises(DecodeError, match="JSON object"):
            decode_crate(data)

    def test_missing_binary_name(self) -> None:
        with pytest.raises(DecodeError, match="BinaryName"):
            decode_crate('{"ProjectName":"tool","BinaryFile":"AA=="}')

    def test_non_string_project_name(self) -> None:
        with pytest.raises(DecodeError, match="ProjectName"):
            decode_crate('{"ProjectName":7,"BinaryName":"tool"}')

    def test_invalid_base64(self) -> None:
        with pytest.raises(DecodeError, match="base64"):
            decode_crate('{"ProjectName":"tool","BinaryName":"tool","BinaryFile":"!!!"}')

    def test_payload_wrong_type(self) -> None:
        with pytest.raises(DecodeError, match="base64"):
            decode_crate('{"ProjectName":"tool","BinaryName":"tool","BinaryFile":[1,2]}')

    def test_source_url_wrong_type(self) -> None:
        with pytest.raises(DecodeError, match="SourceURL"):
            decode_crate('{"ProjectName":"tool","BinaryName":"tool","SourceURL":1}')

    @pytest.mark.parametrize("name", ["../evil", "/bin/sh", "..", ".", "", "a\\b"])
    def test_unsafe_binary_name_rejected(self, name: str) -> None:
        doc = crate_to_document(make_crate())
        doc["BinaryName"] = name
        with pytest.raises(DecodeError, match="not a valid file name"):
            document_to_crate(doc)

    def test_decode_error_chains_cause(self) -> None:
        with pytest.raises(DecodeError) as exc_info:
            decode_crate("{")
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)


# ---------------------------------------------------------------------------
# Name validation
# ---------------------------------------------------------------------------

class TestIsSafeComponent:
    @pytest.mark.parametrize("name", ["tool", "my-tool_1.2", "tool.exe"])
    def test_safe(self, name: str) -> None:
        assert is_safe_component(name)

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b", "a\x00b"])
    def test_unsafe(self, name: str) -> None:
        assert not is_safe_component(name)
