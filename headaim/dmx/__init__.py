"""DMX output: frame encoding, drivers and the sink"""
from .artnet_driver import ArtnetDriver
from .sink import DmxSink
from .uart_rs485_driver import UartRs485Driver
