import threading
import time

import pytest

from sftpkit.ordering import OrderedRequest, OrderedResponse, PacketManager

# Each pair is ((request id, order id) in, (request id, order id) out).
TTABLE1 = [  # basic
    ((0, 0), (0, 0)),
    ((1, 1), (1, 1)),
    ((2, 2), (2, 2)),
    ((3, 3), (3, 3)),
]
TTABLE2 = [  # outgoing packets out of order
    ((10, 0), (12, 2)),
    ((11, 1), (11, 1)),
    ((12, 2), (13, 3)),
    ((13, 3), (10, 0)),
]
TTABLE3 = [  # request ids are not incremental
    ((7, 0), (7, 0)),
    ((1, 1), (1, 1)),
    ((9, 2), (3, 3)),
    ((3, 3), (9, 2)),
]
TTABLE4 = [  # request ids are all the same
    ((1, 0), (1, 0)),
    ((1, 1), (1, 1)),
    ((1, 2), (1, 3)),
    ((1, 3), (1, 2)),
]
TABLES = [TTABLE1, TTABLE2, TTABLE3, TTABLE4]


def test_packet_manager():
    sent = []
    manager = PacketManager(sent.append)
    for table in TABLES:
        sent.clear()
        for (request_id, order_id), _ in table:
            manager.incoming_packet(OrderedRequest(request_id, order_id))
        for _, (request_id, order_id) in table:
            manager.ready_packet(OrderedResponse(request_id, order_id))
        assert [packet.request_id for packet in sent] == [
            request_id for (request_id, _), _ in table
        ]
    manager.close()


def test_response_waits_for_earlier_requests():
    sent = []
    manager = PacketManager(sent.append)
    manager.incoming_packet(OrderedRequest(5, 1))
    manager.incoming_packet(OrderedRequest(6, 2))
    manager.ready_packet(OrderedResponse(6, 2))
    assert sent == []
    manager.ready_packet(OrderedResponse(5, 1))
    assert [packet.order_id for packet in sent] == [1, 2]


def test_order_ids():
    manager = PacketManager(lambda packet: None)
    assert manager.next_order_id() == 1
    assert manager.new_order_id() == 1
    assert manager.next_order_id() == 2
    assert manager.new_order_id() == 2


def test_response_without_request_raises():
    manager = PacketManager(lambda packet: None)
    with pytest.raises(ValueError):
        manager.ready_packet(OrderedResponse(1, 1))


def test_close_waits_for_outstanding_responses():
    sent = []
    manager = PacketManager(sent.append)
    manager.incoming_packet(OrderedRequest(3, 1))

    def respond():
        time.sleep(0.05)
        manager.ready_packet(OrderedResponse(3, 1))

    worker = threading.Thread(target=respond)
    worker.start()
    manager.close()
    worker.join()
    assert [packet.request_id for packet in sent] == [3]


def test_incoming_after_close_raises():
    manager = PacketManager(lambda packet: None)
    manager.close()
    with pytest.raises(RuntimeError):
        manager.incoming_packet(OrderedRequest(1, 1))


def test_context_manager_closes():
    sent = []
    with PacketManager(sent.append) as manager:
        manager.incoming_packet(OrderedRequest(8, 1))
        manager.ready_packet(OrderedResponse(8, 1))
    assert [packet.request_id for packet in sent] == [8]
    with pytest.raises(RuntimeError):
        manager.incoming_packet(OrderedRequest(9, 2))