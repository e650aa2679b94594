import logging

import pytest


@pytest.fixture(autouse=True)
def reset_timewarp_logger():
    """main() attaches a stderr handler to the `timewarp` logger; drop it between tests."""
    yield
    root = logging.getLogger("timewarp")
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.NOTSET)
    root.propagate = True
