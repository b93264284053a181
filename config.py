from policies import ReplacementPolicy


class SimulatorConfig:
    # Simulator defaults and limits

    def __init__(self):
        # Frame table parameters
        self.MIN_FRAMES = 1
        self.MAX_FRAMES = 8
        self.DEFAULT_FRAMES = 3

        # Workload parameters
        self.DEFAULT_REFERENCES = "7,0,1,2,0,3,0,4"
        self.DEFAULT_POLICY = ReplacementPolicy.FIFO

        # Playback slider, 1 is slow and 10 is fast
        self.MIN_SPEED = 1
        self.MAX_SPEED = 10
        self.DEFAULT_SPEED = 6

        # Event log entries shown by the UI
        self.EVENT_LOG_LIMIT = 20

    @property
    def FRAME_RANGE(self):
        # Allowed frame counts, inclusive
        return range(self.MIN_FRAMES, self.MAX_FRAMES + 1)
