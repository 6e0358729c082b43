"""Targeting core: solver, fixtures, target and the per-tick loop"""
from .errors import ConfigurationError, DegenerateGeometry, OutOfRangeChannel
from .geometry import Vector3
from .solver import solve_pan_tilt
from .fixture import Channel, MovingHead
from .target import TargetController
from .world import World
from .report import ChannelFrame, Diagnostic, TickReport
from .sink import NullSink, OutputSink
from .targeting_loop import TargetingLoop
