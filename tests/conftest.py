from pathlib import Path

import pytest

from shave.engine import decompile_artifact

# Import from unified infrastructure
from tests.infrastructure import FIXTURES_DIR, PROTOCOLS, compile_case


@pytest.fixture(params=PROTOCOLS)
def protocol(request) -> str:
    """Runs a test once per compiled template encoding."""
    return request.param


@pytest.fixture
def decompile_case(protocol):
    """Compiles a case for the current protocol and decompiles it back to text."""
    def run(case, **options):
        return decompile_artifact(compile_case(case, protocol), options or None)
    return run


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR
