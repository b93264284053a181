class SimulationError(Exception):
    # Base class for everything the simulator reports to its caller
    pass


class InvalidConfiguration(SimulationError, ValueError):
    # Bad frame count, policy name or reference sequence; nothing was started
    pass


class SimulationNotConfigured(SimulationError, RuntimeError):
    # A step was requested before configure()
    pass


class StepAfterFinished(SimulationError, RuntimeError):
    # A forward step was requested after DONE had already been emitted
    pass
