"""Keeping responses in the order their requests arrived."""

from __future__ import annotations

import heapq
import itertools
import threading
from dataclasses import dataclass
from typing import Any, Callable

_UINT32_MASK = 0xFFFFFFFF


@dataclass
class OrderedRequest:
    """A received request tagged with its arrival order."""

    request_id: int
    order_id: int
    packet: Any = None


@dataclass
class OrderedResponse:
    """A response tagged with the order id of the request it answers."""

    request_id: int
    order_id: int
    packet: Any = None


class PacketManager:
    """Sends responses in the order their requests were registered.

    Requests are registered with incoming_packet and answered with
    ready_packet, possibly from several threads; the sender is called
    for each response as soon as every earlier request has been answered.
    """

    def __init__(self, sender: Callable[[OrderedResponse], Any]) -> None:
        self._sender = sender
        self._incoming: list[tuple[int, int, OrderedRequest]] = []
        self._outgoing: list[tuple[int, int, OrderedResponse]] = []
        self._sequence = itertools.count()
        self._packet_count = 0
        self._pending = 0
        self._closed = False
        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)

    def __enter__(self) -> PacketManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def new_order_id(self) -> int:
        """Allocate and return the next order id."""
        with self._lock:
            self._packet_count = (self._packet_count + 1) & _UINT32_MASK
            return self._packet_count

    def next_order_id(self) -> int:
        """Return the order id the next allocation will give, without allocating."""
        with self._lock:
            return (self._packet_count + 1) & _UINT32_MASK

    def incoming_packet(self, packet: OrderedRequest) -> None:
        """Register a request whose response must be sent in its order."""
        with self._lock:
            if self._closed:
                raise RuntimeError("packet manager is closed")
            self._pending += 1
            heapq.heappush(self._incoming, (packet.order_id, next(self._sequence), packet))
            self._send_ready()

    def ready_packet(self, packet: OrderedResponse) -> None:
        """Register a response as ready; it is sent once its turn comes."""
        with self._lock:
            if self._pending == 0:
                raise ValueError("response without an outstanding request")
            heapq.heappush(self._outgoing, (packet.order_id, next(self._sequence), packet))
            try:
                self._send_ready()
            finally:
                self._pending -= 1
                if self._pending == 0:
                    self._idle.notify_all()

    def close(self) -> None:
        """Wait until every registered request is answered, then stop."""
        with self._lock:
            self._idle.wait_for(lambda: self._pending == 0)
            self._closed = True

    def _send_ready(self) -> None:
        while (
            self._incoming
            and self._outgoing
            and self._incoming[0][0] == self._outgoing[0][0]
        ):
            heapq.heappop(self._incoming)
            _, _, response = heapq.heappop(self._outgoing)
            self._sender(response)