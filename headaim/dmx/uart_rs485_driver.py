import logging
import time

import serial

logger = logging.getLogger("headaim.dmx.uart")


class UartRs485Driver:
    def __init__(self, device: str = None):
        self.device = device
        self.last_frame = None
        self.ser = None

    def open(self):
        try:
            self.ser = serial.Serial(self.device or '/dev/serial0', baudrate=250000, bytesize=8, parity='N', stopbits=2, timeout=1)
        except serial.SerialException:
            logger.warning("Failed to open %s; driver in noop mode", self.device)
            self.ser = None

    def close(self):
        if self.ser is not None:
            try:
                self.ser.close()
            except serial.SerialException:
                logger.warning("Error closing %s", self.device)
            self.ser = None

    def send_frame(self, frame: bytes) -> bool:
        self.last_frame = frame
        if self.ser is None:
            # noop but simulate success
            logger.debug("Driver noop send_frame, len=%d", len(frame))
            return True
        try:
            # DMX break before the start code
            self.ser.break_condition = True
            time.sleep(0.0001)
            self.ser.break_condition = False
            self.ser.write(frame)
            self.ser.flush()
            return True
        except serial.SerialException as e:
            logger.exception("Failed sending DMX frame: %s", e)
            return False
# UART RS485 driver
