import socket

import pytest

from ossched.msg import (
    Message,
    ProcessRequest,
    ProtocolError,
    recv_message,
    send_message,
)


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    yield left, right
    left.close()
    right.close()


def test_packed_size_is_fixed():
    assert len(Message(1, ProcessRequest.RUN, 1000).pack()) == Message.SIZE
    assert Message.SIZE == 12


@pytest.mark.parametrize("request_kind", list(ProcessRequest))
def test_pack_unpack_round_trip(request_kind):
    original = Message(4242, request_kind, 123456)
    assert Message.unpack(original.pack()) == original


def test_unpack_gives_enum_member():
    decoded = Message.unpack(Message(7, ProcessRequest.DONE, 5).pack())
    assert decoded.request is ProcessRequest.DONE
    assert decoded.request.name == "DONE"


def test_unpack_rejects_wrong_length():
    data = Message(1, ProcessRequest.ACK, 0).pack()
    with pytest.raises(ProtocolError):
        Message.unpack(data[:-1])
    with pytest.raises(ProtocolError):
        Message.unpack(data + b"\x00")


def test_unpack_rejects_unknown_request_code():
    good = Message(1, ProcessRequest.ACK, 0).pack()
    bad = Message(1, ProcessRequest.ACK, 0).pack().replace(
        good[4:8], (99).to_bytes(4, "little") if good[4] == 2 else (99).to_bytes(4, "big")
    )
    with pytest.raises(ProtocolError):
        Message.unpack(bad)


def test_pack_rejects_out_of_range_time():
    with pytest.raises(ProtocolError):
        Message(1, ProcessRequest.RUN, -1).pack()


def test_send_and_receive_over_socket(pair):
    left, right = pair
    sent = Message(31, ProcessRequest.BLOCK, 2500)
    send_message(left, sent)
    assert recv_message(right) == sent


def test_messages_arrive_in_order(pair):
    left, right = pair
    first = Message(1, ProcessRequest.RUN, 100)
    second = Message(1, ProcessRequest.BLOCK, 200)
    send_message(left, first)
    send_message(left, second)
    assert [recv_message(right), recv_message(right)] == [first, second]


def test_receive_on_closed_connection_raises_eof(pair):
    left, right = pair
    left.close()
    with pytest.raises(EOFError):
        recv_message(right)


def test_receive_truncated_message_raises(pair):
    left, right = pair
    left.sendall(Message(1, ProcessRequest.RUN, 10).pack()[:5])
    left.close()
    with pytest.raises(ProtocolError):
        recv_message(right)