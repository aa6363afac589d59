from collections import deque

from ossched.msg import TICKS_MS, Message, ProcessRequest
from ossched.pcb import Pcb
from ossched.sjf import sjf_scheduler


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


def test_empty_queue_leaves_cpu_idle():
    assert sjf_scheduler(0, deque(), None) is None


def test_picks_shortest_job_and_keeps_order_of_rest():
    a = Pcb(pid=1, time_ms=300)
    b = Pcb(pid=2, time_ms=100)
    c = Pcb(pid=3, time_ms=200)
    rq = deque([a, b, c])
    assert sjf_scheduler(0, rq, None) is b
    assert list(rq) == [a, c]


def test_tie_goes_to_earliest_arrival():
    a = Pcb(pid=1, time_ms=100)
    b = Pcb(pid=2, time_ms=100)
    rq = deque([a, b])
    assert sjf_scheduler(0, rq, None) is a
    assert list(rq) == [b]


def test_last_element_can_be_chosen():
    a = Pcb(pid=1, time_ms=300)
    b = Pcb(pid=2, time_ms=100)
    rq = deque([a, b])
    assert sjf_scheduler(0, rq, None) is b
    rq.append(Pcb(pid=3, time_ms=400))
    assert [task.pid for task in rq] == [1, 3]


def test_shorter_arrival_does_not_preempt():
    long = Pcb(pid=1, time_ms=10 * TICKS_MS)
    short = Pcb(pid=2, time_ms=TICKS_MS)
    rq = deque([short])
    assert sjf_scheduler(10, rq, long) is long
    assert list(rq) == [short]
    assert long.elapsed_time_ms == TICKS_MS


def test_finished_task_reports_done_then_next_shortest_runs():
    rec = _Recorder()
    a = Pcb(pid=1, sock=rec, time_ms=TICKS_MS)
    b = Pcb(pid=2, time_ms=500)
    c = Pcb(pid=3, time_ms=50)
    rq = deque([b, c])
    assert sjf_scheduler(40, rq, a) is c
    assert rec.messages() == [Message(1, ProcessRequest.DONE, 40)]
    assert list(rq) == [b]