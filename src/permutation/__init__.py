"""State-space permutations computed by circuits."""
from permutation.permutation import Permutation
from permutation.simulator import SimulationConfig, SimulationResult, SimulationWidthError, simulate
