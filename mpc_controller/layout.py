from dataclasses import dataclass

STATE_NAMES = ("x", "y", "psi", "v", "cte", "epsi")
ACTUATOR_NAMES = ("delta", "a")

n_states = len(STATE_NAMES)
n_actuators = len(ACTUATOR_NAMES)


@dataclass(frozen=True)
class VariableLayout:
    '''
    Offsets of the flat optimization vector

    The solver takes all the state and actuator variables in one vector:
    six state blocks of length N followed by two actuator blocks of
    length N - 1. The problem builder and the control extractor both read
    their indices from here.
    '''
    horizon: int

    def __post_init__(self):
        if self.horizon < 2:
            raise ValueError(f"horizon must be at least 2, got {self.horizon}")

    @property
    def x_start(self):
        return 0

    @property
    def y_start(self):
        return self.x_start + self.horizon

    @property
    def psi_start(self):
        return self.y_start + self.horizon

    @property
    def v_start(self):
        return self.psi_start + self.horizon

    @property
    def cte_start(self):
        return self.v_start + self.horizon

    @property
    def epsi_start(self):
        return self.cte_start + self.horizon

    @property
    def delta_start(self):
        return self.epsi_start + self.horizon

    @property
    def a_start(self):
        return self.delta_start + self.horizon - 1

    @property
    def n_vars(self):
        return n_states * self.horizon + n_actuators * (self.horizon - 1)

    @property
    def n_constraints(self):
        return n_states * self.horizon

    @property
    def state_starts(self):
        """Start offsets of the state blocks, in STATE_NAMES order."""
        return (self.x_start, self.y_start, self.psi_start,
                self.v_start, self.cte_start, self.epsi_start)

    def blocks(self):
        """
        Returns:
            [(name, start, length), ...] for every block in vector order
        """
        out = [(name, start, self.horizon)
               for name, start in zip(STATE_NAMES, self.state_starts)]
        out.append(("delta", self.delta_start, self.horizon - 1))
        out.append(("a", self.a_start, self.horizon - 1))
        return out

    def block(self, name):
        """Slice of the named block."""
        for block_name, start, length in self.blocks():
            if block_name == name:
                return slice(start, start + length)
        raise KeyError(name)
