import pytest

from sparrowwire.packet import PacketSequence, PacketType
from sparrowwire.response import ResponsePayload


def test_frame_header_layout():
    sequence = PacketSequence()
    assert sequence.frame(b"abc") == b"\x03\x00\x00\x00abc"


def test_frame_length_is_three_bytes_little_endian():
    body = b"x" * 300
    framed = PacketSequence().frame(body)
    assert int.from_bytes(framed[:3], "little") == len(body)
    assert framed[4:] == body


def test_increase_and_reset():
    sequence = PacketSequence()
    sequence.increase()
    sequence.increase()
    assert sequence.frame(b"")[3] == 2
    sequence.reset()
    assert sequence.frame(b"")[3] == 0


def test_sequence_wraps_after_255():
    sequence = PacketSequence()
    for _ in range(256):
        sequence.increase()
    assert sequence.sequence_id == 0


def test_frame_accepts_response_payload():
    payload = ResponsePayload()
    payload.dump_length_encoded_string(b"ok")
    sequence = PacketSequence()
    sequence.increase()
    framed = sequence.frame(payload)
    assert framed[:4] == bytes([3, 0, 0, 1])
    assert framed[4:] == bytes(payload)


def test_packet_type_from_command_byte():
    assert PacketType(0x03) is PacketType.COM_QUERY
    assert PacketType(0x16) is PacketType.COM_STMT_PREPARE
    assert PacketType(0x1F) is PacketType.COM_RESET_CONNECTION


def test_packet_type_gap_is_rejected():
    with pytest.raises(ValueError):
        PacketType(0x1B)