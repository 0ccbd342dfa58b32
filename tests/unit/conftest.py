import pytest

from hack_cpu import HackMachine
from vm_helpers import translate


# Segment bases used by programs run without the bootstrap
INITIAL_STATE = {"SP": 256, "LCL": 300, "ARG": 400, "THIS": 3000, "THAT": 3010}


@pytest.fixture
def run_vm():
    """Translate VM source, load it into a HackMachine and run it to the end."""
    def _run(src, stem="Test", ram=None, max_steps=100000):
        machine = HackMachine(translate(src, stem=stem))
        for reg, value in INITIAL_STATE.items():
            machine[reg] = value
        for address, value in (ram or {}).items():
            machine[address] = value
        assert machine.run(max_steps), "program did not terminate"
        return machine
    return _run
