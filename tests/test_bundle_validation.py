from __future__ import annotations

import pytest

from brutus.bundle.reader import read_bundle
from brutus.bundle.writer import write_bundle
from brutus.codecs.encoding import encode
from brutus.core import validate
from brutus.core.validate import (
    BundleError,
    BundleOverflowError,
    DecodeError,
    DecompressError,
    EntryNameError,
    InvalidFlagError,
    MalformedHeaderError,
    TruncatedEntryError,
    UnsupportedVersionError,
)
from conftest import raw_header, raw_record


@pytest.mark.parametrize("data", [b"", b"br", b"BRUT\x01\x00\x00\x00", b"-- lua source", b"brut\x01"])
def test_header_gate_rejects_missing_or_short_magic(data: bytes) -> None:
    with pytest.raises(MalformedHeaderError, match=r"malformed header"):
        read_bundle(data)


@pytest.mark.parametrize("major,minor", [(0, 9), (1, 1), (2, 0)])
def test_version_gate_requires_exact_match(major: int, minor: int) -> None:
    data = raw_header(1, major=major, minor=minor) + raw_record(b"main", 0, encode(b"x").encode())
    with pytest.raises(UnsupportedVersionError) as exc:
        read_bundle(data)
    assert (exc.value.major, exc.value.minor) == (major, minor)
    assert f"{major}.{minor}" in str(exc.value)


def test_decode_failure_reports_entry_index() -> None:
    data = (
        raw_header(2)
        + raw_record(b"ok", 0, encode(b"fine").encode())
        + raw_record(b"bad", 0, b"!!!!")
    )
    with pytest.raises(DecodeError) as exc:
        read_bundle(data)
    assert exc.value.index == 1
    assert str(exc.value).startswith("entry 1:")


def test_decompress_failure_reports_entry_index() -> None:
    data = raw_header(1) + raw_record(b"main", 1, encode(b"this is not a zlib stream").encode())
    with pytest.raises(DecompressError) as exc:
        read_bundle(data)
    assert exc.value.index == 0


def test_truncated_payload_is_rejected() -> None:
    data = write_bundle([("a", b"x=1"), ("main", b"print(1)")])
    with pytest.raises(TruncatedEntryError) as exc:
        read_bundle(data[:-3])
    assert exc.value.index == 1


def test_missing_records_are_rejected() -> None:
    data = raw_header(3) + raw_record(b"a", 0, encode(b"x").encode())
    with pytest.raises(TruncatedEntryError) as exc:
        read_bundle(data)
    assert exc.value.index == 1


def test_all_bundle_errors_share_a_base() -> None:
    with pytest.raises(BundleError):
        read_bundle(b"nope")
    assert issubclass(BundleError, ValueError)


@pytest.mark.parametrize("name", ["", "a\0b"])
def test_writer_rejects_unreadable_names(name: str) -> None:
    with pytest.raises(EntryNameError):
        write_bundle([(name, b"pass")])


def test_writer_rejects_duplicate_names() -> None:
    with pytest.raises(EntryNameError, match=r"duplicate"):
        write_bundle([("a", b"1"), ("a", b"2")])


def test_writer_rejects_too_many_entries() -> None:
    entries = [(f"m{i}", b"") for i in range(0x10000)]
    with pytest.raises(BundleOverflowError, match=r"too many entries: 65536"):
        write_bundle(entries)


def test_writer_rejects_oversized_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(validate, "MAX_PAYLOAD_LENGTH", 4)
    write_bundle([("a", b"x=1")])  # encodes to exactly 4 bytes
    with pytest.raises(BundleOverflowError, match=r"entry 'b'"):
        write_bundle([("b", b"hello")])


@pytest.mark.parametrize("flag", [2, 7, 255])
def test_compression_marker_must_be_zero_or_one(flag: int) -> None:
    data = (
        raw_header(2)
        + raw_record(b"a", 0, encode(b"x=1").encode())
        + raw_record(b"main", flag, encode(b"print(1)").encode())
    )
    with pytest.raises(InvalidFlagError, match=rf"must be 0 or 1, got {flag}") as exc:
        read_bundle(data)
    assert exc.value.index == 1
