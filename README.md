# ossched

A small operating-system scheduling simulator. A scheduler process keeps a
simulated clock that advances in 10 ms ticks; client applications connect to
it over a UNIX domain socket (`/tmp/scheduler.sock`), ask for CPU time or for
blocked (I/O) time, and are told when their request has been served.

Each message on the socket is a fixed-size record of a process id, a request
kind (`RUN`, `BLOCK`, `ACK` or `DONE`) and a time in milliseconds.

## Installing

```
pip install .
```

Tests need the `test` extra:

```
pip install .[test]
pytest
```

## Running the simulator

Start the scheduler, naming the scheduling policy:

```
ossched-sim FIFO
```

The accepted policies are `FIFO`, `SJF`, `RR` and `MLFQ`:

- `FIFO` runs ready tasks to completion in arrival order.
- `SJF` runs, whenever the CPU is idle, the ready task with the smallest
  requested time (earliest arrival on a tie), without preemption.
- `RR` gives each task a 500 ms time slice and sends an unfinished task to
  the back of the ready queue.
- `MLFQ` keeps three levels with slices of 500, 1000 and 2000 ms; new tasks
  enter the top level and a task that uses up its slice drops one level.

An unknown name prints the list of accepted policies and exits with status 1.
The simulator replaces any stale socket file, prints the simulated time once
per simulated second and runs until it is interrupted.

## Client applications

### A single CPU burst

```
ossched-app <name> <time_s>
```

Asks the scheduler for `time_s` whole seconds of CPU (a non-negative decimal
integer). When the scheduler reports the work done, the application prints
the simulated finish time, the elapsed time and the CPU time used.

### A sequence of bursts with I/O

```
ossched-app-io <burst-file.csv>
```

The application is named after the file (its base name without extension).
Each non-empty line of the file that does not start with `#` describes one
burst:

```
burst_ms[,block_ms[,nice[,label[page,page,...]]]]
```

For example:

```
# cpu, io, nice, pages
200,100,0,pages[1,2,3]
500
300,50
```

The page list is read only when some text precedes its opening bracket, and
holds at most 32 ids. Nice values and page lists are parsed and kept on each
`Burst`, but neither the applications nor the schedulers make use of them.

For every burst the application requests `burst_ms` of CPU and then, if
`block_ms` is greater than zero, `block_ms` of blocked time. At the end it
prints the elapsed, CPU and blocked times. Malformed lines are logged as
warnings and skipped; a file with no usable lines is an error. If the
exchange with the scheduler fails part way, the error is logged and the
figures cover the bursts completed so far.

## Using it as a library

- `ossched.msg` — `ProcessRequest`, the `Message` wire record
  (`Message.pack`, `Message.unpack`, `Message.SIZE`) and `send_message` /
  `recv_message`. Encoding or decoding a bad record raises `ProtocolError`;
  `recv_message` raises `EOFError` when the peer closes before a message
  starts and `ProtocolError` when it closes in the middle of one. Also holds
  `TICKS_MS`, `SOCKET_PATH` and `MAX_PAGES`.
- `ossched.pcb` — `Pcb`, the process control block, with `Pcb.notify` to send
  a message to the task's application, and `TaskStatus`.
- `ossched.burst` — `Burst`, `parse_burst_line`, `read_bursts` and
  `BurstParseError`.
- `ossched.fifo`, `ossched.sjf`, `ossched.rr` — `fifo_scheduler`,
  `sjf_scheduler` and `rr_scheduler`, each called once per tick with the
  current time, the ready queue (a `collections.deque` of `Pcb`) and the task
  now on the CPU, and returning the task that holds the CPU afterwards. A
  finished task is sent `DONE`.
- `ossched.mlfq` — `MlfqScheduler`, a callable three-level feedback queue
  scheduler with time slices given by `slice_of`.
- `ossched.ossim` — `Simulator` (with `accept_clients`,
  `check_new_commands`, `check_blocked_queue`, `step` and `run`),
  `SchedulerKind`, `get_scheduler`, `make_scheduler` and
  `setup_server_socket`.
- `ossched.app` and `ossched.app_io` — `parse_seconds`, `run_app`,
  `basename_no_ext`, `handle_request` and `run_app_io`; the runners return
  `AppResult` and `AppIoResult` records with the timing figures.

## Limits

The socket path used by the commands is fixed at `/tmp/scheduler.sock`, and
the simulator has a single CPU. There is no memory management: page lists in
burst files are read but nothing acts on them.