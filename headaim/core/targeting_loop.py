import threading
import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Set, Tuple

from headaim.core.errors import DegenerateGeometry
from headaim.core.event_log import EventLog, get_event_log
from headaim.core.fixture import MovingHead
from headaim.core.geometry import Vector3
from headaim.core.report import INPUT_UNAVAILABLE, SINK_ERROR, ChannelFrame, Diagnostic, TickReport
from headaim.core.sink import NullSink, OutputSink
from headaim.core.world import World

logger = logging.getLogger("headaim.loop")


class TargetingLoop:
    """Per-tick driver: integrate input, aim every head, hand off one frame set.

    tick() never raises for a single fixture. Failures end up in the
    returned TickReport.
    """

    def __init__(self, world: World, sink: Optional[OutputSink] = None, input_source=None, hz: float = 60.0,
                 workers: int = 0, event_log: Optional[EventLog] = None):
        self.world = world
        self.sink = sink or NullSink()
        self.input_source = input_source
        self.hz = hz
        self.event_log = event_log if event_log is not None else get_event_log()
        self.workers = workers
        self._executor = self._make_executor()
        self._stop = threading.Event()
        self._thread = None
        self._seq = 0
        self._active: Set[tuple] = set()
        self.latest_report: Optional[TickReport] = None

    def start(self):
        if self._thread and self._thread.is_alive():
            return
        if self._executor is None:
            # stop() shuts the pool down
            self._executor = self._make_executor()
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, daemon=True, name="targeting-loop")
        self._thread.start()

    def stop(self):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=1.0)
        if self._executor:
            self._executor.shutdown(wait=True)
            self._executor = None

    def _make_executor(self) -> Optional[ThreadPoolExecutor]:
        if self.workers <= 0:
            return None
        return ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="headaim-solve")

    def is_running(self) -> bool:
        return bool(self._thread and self._thread.is_alive())

    def run(self):
        period = 1.0 / self.hz if self.hz > 0 else 1.0 / 60.0
        logger.info("Targeting loop started at %.2f Hz with %d fixtures", 1.0 / period, len(self.world.fixtures))

        while not self._stop.is_set():
            start = time.time()
            try:
                self.tick()
            except Exception:
                logger.exception("Targeting tick failed")

            # sleep to maintain tick
            elapsed = time.time() - start
            to_sleep = period - elapsed
            if to_sleep > 0:
                self._stop.wait(to_sleep)
        logger.info("Targeting loop stopped after %d ticks", self._seq)

    def tick(self, sample=None) -> TickReport:
        diagnostics: List[Diagnostic] = []

        if sample is None and self.input_source is not None:
            try:
                sample = self.input_source.sample()
            except Exception as e:
                logger.debug("Input source failed: %s", e)
                diagnostics.append(Diagnostic(kind=INPUT_UNAVAILABLE, message=str(e)))
                sample = None
        if sample is not None:
            try:
                self.world.target.integrate(sample)
            except ValueError as e:
                diagnostics.append(Diagnostic(kind=INPUT_UNAVAILABLE, message=str(e)))

        target = self.world.target.snapshot()
        frames: List[ChannelFrame] = []
        for fixture, angles, error in self._solve_all(target):
            if error is not None:
                # keep previous angles
                diagnostics.append(Diagnostic.from_error(error, fixture.name))
            else:
                fixture.pan.value, fixture.tilt.value = angles
                for channel in (fixture.pan, fixture.tilt):
                    out_of_range = channel.check(fixture.name)
                    if out_of_range is not None:
                        diagnostics.append(Diagnostic.from_error(out_of_range))
            frames.append(ChannelFrame.from_fixture(fixture))

        try:
            self.sink.send(frames)
        except Exception as e:
            logger.debug("Output sink failed", exc_info=True)
            diagnostics.append(Diagnostic(kind=SINK_ERROR, message=str(e)))

        self._seq += 1
        report = TickReport(
            seq=self._seq,
            ts_ms=int(time.time() * 1000),
            target=target,
            frames=tuple(frames),
            diagnostics=tuple(diagnostics),
        )
        self._track_transitions(report)
        self.latest_report = report
        return report

    def _solve_all(self, target: Vector3) -> List[Tuple[MovingHead, Optional[Tuple[float, float]], Optional[Exception]]]:
        fixtures = self.world.fixtures
        if self._executor is None:
            return [self._solve_one(f, target) for f in fixtures]
        # join before anything is forwarded
        return list(self._executor.map(lambda f: self._solve_one(f, target), fixtures))

    @staticmethod
    def _solve_one(fixture: MovingHead, target: Vector3):
        try:
            return fixture, fixture.aim(target), None
        except DegenerateGeometry as e:
            return fixture, None, e

    def _track_transitions(self, report: TickReport):
        # log a condition when it appears and when it clears, not every tick
        current = {d.key: d for d in report.diagnostics if d.kind != INPUT_UNAVAILABLE}
        keys = set(current)
        for key in keys - self._active:
            d = current[key]
            logger.warning("%s: %s", d.kind, d.message)
            self.event_log.insert_event('WARN', 'loop', d.kind, d.fixture or '', d.to_dict())
        for key in self._active - keys:
            kind, fixture, channel = key
            logger.info("%s cleared for %s", kind, fixture or 'loop')
            self.event_log.insert_event('INFO', 'loop', f"{kind}_cleared", fixture or '', {"channel": channel})
        self._active = keys
# Targeting loop
