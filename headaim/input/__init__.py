"""Input sample sources"""
from .sources import GamepadAxesInput, InputSource, LatestSampleInput, ZeroInput
