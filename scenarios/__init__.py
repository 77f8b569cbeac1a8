# Campus Access Control - Demo Scenarios
# Reference cast and the scenario runner

from .demo_data import build_demo_cast, run_demo_sequence
from .access_scenarios import run_scenarios

__all__ = ['build_demo_cast', 'run_demo_sequence', 'run_scenarios']
