"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Run the async tests (marked with pytest.mark.anyio) on asyncio only"""
    return "asyncio"
