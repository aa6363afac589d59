from collections import deque

from ossched.fifo import fifo_scheduler
from ossched.msg import TICKS_MS, Message, ProcessRequest
from ossched.pcb import Pcb


class _Recorder:
    def __init__(self):
        self.data = bytearray()

    def sendall(self, data):
        self.data += data

    def messages(self):
        size = Message.SIZE
        return [
            Message.unpack(bytes(self.data[i:i + size]))
            for i in range(0, len(self.data), size)
        ]


class _Broken:
    def sendall(self, data):
        raise OSError("broken pipe")


def test_idle_cpu_with_empty_queue_stays_idle():
    assert fifo_scheduler(0, deque(), None) is None


def test_idle_cpu_takes_head_without_running_it():
    a, b = Pcb(pid=1, time_ms=100), Pcb(pid=2, time_ms=100)
    rq = deque([a, b])
    assert fifo_scheduler(0, rq, None) is a
    assert list(rq) == [b]
    assert a.elapsed_time_ms == 0


def test_running_task_advances_one_tick():
    a = Pcb(pid=1, time_ms=100)
    assert fifo_scheduler(10, deque(), a) is a
    assert a.elapsed_time_ms == TICKS_MS


def test_finished_task_is_reported_and_replaced():
    rec = _Recorder()
    a = Pcb(pid=1, sock=rec, time_ms=2 * TICKS_MS)
    b = Pcb(pid=2, time_ms=100)
    rq = deque([b])
    cpu = fifo_scheduler(10, rq, a)
    assert cpu is a
    cpu = fifo_scheduler(20, rq, cpu)
    assert cpu is b
    assert rec.messages() == [Message(1, ProcessRequest.DONE, 20)]
    assert not rq


def test_failed_write_still_releases_cpu():
    a = Pcb(pid=1, sock=_Broken(), time_ms=TICKS_MS)
    assert fifo_scheduler(10, deque(), a) is None


def test_tasks_complete_in_arrival_order():
    recs = [_Recorder() for _ in range(3)]
    tasks = [
        Pcb(pid=i + 1, sock=rec, time_ms=(3 - i) * TICKS_MS)
        for i, rec in enumerate(recs)
    ]
    rq = deque(tasks)
    cpu = None
    finished = []
    for tick in range(20):
        before = cpu
        cpu = fifo_scheduler(tick * TICKS_MS, rq, cpu)
        if before is not None and before is not cpu:
            finished.append(before.pid)
    assert finished == [1, 2, 3]
    assert all(len(rec.messages()) == 1 for rec in recs)