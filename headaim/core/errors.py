class HeadAimError(RuntimeError):
    pass


class DegenerateGeometry(HeadAimError):
    """Target coincides with the fixture, so there is no direction to aim."""

    def __init__(self, fixture_pos, target_pos):
        self.fixture_pos = tuple(fixture_pos)
        self.target_pos = tuple(target_pos)
        super().__init__(f"target {self.target_pos} coincides with fixture position {self.fixture_pos}")


class OutOfRangeChannel(HeadAimError):
    def __init__(self, fixture: str, channel: int, value: float, max_value: float):
        self.fixture = fixture
        self.channel = channel
        self.value = value
        self.max_value = max_value
        super().__init__(f"{fixture}: channel {channel} value {value:.3f} exceeds +/-{max_value:g}")


class ConfigurationError(HeadAimError):
    pass
# Error kinds
