import pytest

from sparrowwire.response import ResponsePayload


def _encode_int(n):
    payload = ResponsePayload()
    payload.dump_length_encoded_int(n)
    return bytes(payload)


@pytest.mark.parametrize("n", [0, 1, 249, 250])
def test_small_length_encoded_int_is_one_byte(n):
    assert _encode_int(n) == bytes([n])


@pytest.mark.parametrize(
    "n, marker, width",
    [
        (251, 0xFC, 2),
        (0xFFFF, 0xFC, 2),
        (0x10000, 0xFD, 3),
        (0xFFFFFF, 0xFD, 3),
        (0x1000000, 0xFE, 8),
        (0xFFFF_FFFF_FFFF_FFFF, 0xFE, 8),
    ],
)
def test_length_encoded_int_round_trip(n, marker, width):
    encoded = _encode_int(n)
    assert encoded[0] == marker
    assert len(encoded) == 1 + width
    assert int.from_bytes(encoded[1:], "little") == n


@pytest.mark.parametrize("n", [-1, 1 << 64])
def test_length_encoded_int_out_of_range(n):
    with pytest.raises(ValueError):
        _encode_int(n)


@pytest.mark.parametrize(
    "method, width, n",
    [
        ("dump_uint16", 2, 0xBEEF),
        ("dump_uint32", 4, 0xDEADBEEF),
        ("dump_uint64", 8, 0x0123456789ABCDEF),
    ],
)
def test_fixed_width_ints_little_endian(method, width, n):
    payload = ResponsePayload()
    getattr(payload, method)(n)
    data = bytes(payload)
    assert len(data) == width
    assert int.from_bytes(data, "little") == n


def test_length_encoded_string_and_null():
    payload = ResponsePayload()
    payload.dump_length_encoded_string(b"abc")
    payload.dump_length_encoded_null()
    assert bytes(payload) == b"\x03abc\xfb"


def test_append_and_extend():
    payload = ResponsePayload()
    payload.append(0x00)
    payload.extend(b"xy")
    assert bytes(payload) == b"\x00xy"
    assert len(payload) == 3


def test_text_row_mixed_values():
    payload = ResponsePayload()
    payload.dump_text_row(["a", 12, None, 1.5])
    assert bytes(payload) == b"\x01a\x0212\xfb\x031.5"


def test_text_row_integral_float_has_no_fraction():
    payload = ResponsePayload()
    payload.dump_text_row([1.0])
    assert bytes(payload) == b"\x011"


@pytest.mark.parametrize("value", [1e-7, 1e20, -3.25, 123456.789])
def test_text_row_float_round_trips_without_exponent(value):
    payload = ResponsePayload()
    payload.dump_text_row([value])
    data = bytes(payload)
    text = data[1:].decode("ascii")
    assert data[0] == len(text)
    assert "e" not in text.lower()
    assert float(text) == value


@pytest.mark.parametrize("value", [b"raw", True, object()])
def test_text_row_unsupported_value(value):
    payload = ResponsePayload()
    with pytest.raises(TypeError):
        payload.dump_text_row([value])


def test_binary_time_zero():
    payload = ResponsePayload()
    payload.dump_binary_time(0)
    assert bytes(payload) == b"\x00"


def test_binary_time_whole_seconds():
    nanos = ((1 * 24 + 2) * 3600 + 3 * 60 + 4) * 1_000_000_000
    payload = ResponsePayload()
    payload.dump_binary_time(nanos)
    data = bytes(payload)
    assert len(data) == 9
    assert data[0] == 8
    assert data[1] == 0
    assert list(data[2:]) == [1, 0, 0, 0, 2, 3, 4]


def test_binary_time_negative_with_microseconds():
    micros = 250_000
    nanos = -((5 * 60 + 6) * 1_000_000_000 + micros * 1000)
    payload = ResponsePayload()
    payload.dump_binary_time(nanos)
    data = bytes(payload)
    assert len(data) == 13
    assert data[0] == 12
    assert data[1] == 1
    assert list(data[6:9]) == [0, 5, 6]
    assert int.from_bytes(data[9:], "little") == micros