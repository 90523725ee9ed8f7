import pytest

from oxideux.request import (
    Request,
    RequestError,
    RequestKind,
    RequestResult,
    decode_request,
    decode_result,
    encode_request,
    encode_result,
)


def test_disconnect_wire_form():
    assert encode_request(Request(RequestKind.DISCONNECT)) == b"\x00\x00\x00\x00"


def test_index_wire_form():
    data = encode_request(Request(RequestKind.DOWNLOAD_FILE_BY_INDEX, index=5))
    assert data == b"\x02\x00\x00\x00\x05\x00\x00\x00\x00\x00\x00\x00"


def test_result_wire_form():
    assert encode_result(RequestResult.ERR_INDEX_OUT_OF_BOUNDS) == b"\x02\x00\x00\x00"


@pytest.mark.parametrize(
    "request_value",
    [
        Request(RequestKind.DISCONNECT),
        Request(RequestKind.GET_FILE_COUNT),
        Request(RequestKind.DOWNLOAD_FILE_BY_INDEX, index=0),
        Request(RequestKind.DOWNLOAD_FILE_BY_INDEX, index=2**64 - 1),
        Request(RequestKind.DOWNLOAD_FILE_BY_NAME, name="report.txt"),
        Request(RequestKind.DOWNLOAD_FILE_BY_NAME, name="ünïcode ✓"),
        Request(RequestKind.DOWNLOAD_FILE_BY_NAME, name=""),
        Request(RequestKind.DOWNLOAD_ALL_FILES),
    ],
)
def test_request_round_trip(request_value):
    assert decode_request(encode_request(request_value)) == request_value


@pytest.mark.parametrize("result", list(RequestResult))
def test_result_round_trip(result):
    assert decode_result(encode_result(result)) is result


def test_trailing_bytes_are_ignored():
    request = Request(RequestKind.GET_FILE_COUNT)
    assert decode_request(encode_request(request) + b"extra") == request


def test_unknown_request_variant():
    with pytest.raises(RequestError, match="invalid request variant"):
        decode_request(b"\x09\x00\x00\x00")


def test_unknown_result_variant():
    with pytest.raises(RequestError, match="invalid result variant"):
        decode_result(b"\x07\x00\x00\x00")


def test_truncated_request():
    data = encode_request(Request(RequestKind.DOWNLOAD_FILE_BY_NAME, name="abcdef"))
    with pytest.raises(RequestError, match="unexpected end of data"):
        decode_request(data[:-1])


def test_empty_result_data():
    with pytest.raises(RequestError):
        decode_result(b"")


def test_invalid_utf8_name():
    good = encode_request(Request(RequestKind.DOWNLOAD_FILE_BY_NAME, name="ab"))
    bad = good[:-2] + b"\xff\xfe"
    with pytest.raises(RequestError, match="UTF-8"):
        decode_request(bad)


def test_naturalize_ok():
    assert RequestResult.OK.naturalize() is None


def test_naturalize_unauthorized():
    with pytest.raises(RequestError, match="Unauthorized access"):
        RequestResult.ERR_UNAUTHORIZED_ACCESS.naturalize()


def test_naturalize_out_of_bounds():
    with pytest.raises(RequestError, match="Index out of bounds"):
        RequestResult.ERR_INDEX_OUT_OF_BOUNDS.naturalize()


def test_request_kind_coerced_from_int():
    assert Request(4).kind is RequestKind.DOWNLOAD_ALL_FILES


@pytest.mark.parametrize(
    "kwargs",
    [
        {"kind": RequestKind.DOWNLOAD_FILE_BY_INDEX},
        {"kind": RequestKind.DOWNLOAD_FILE_BY_INDEX, "index": -1},
        {"kind": RequestKind.DOWNLOAD_FILE_BY_INDEX, "index": 2**64},
        {"kind": RequestKind.DOWNLOAD_FILE_BY_NAME},
        {"kind": RequestKind.DISCONNECT, "index": 1},
        {"kind": RequestKind.GET_FILE_COUNT, "name": "x"},
    ],
)
def test_malformed_request_rejected(kwargs):
    with pytest.raises(ValueError):
        Request(**kwargs)