"""
Pytest configuration for tessera_identity tests.

Provides account fixtures shared by the unit and integration suites.
"""

import pytest

from tessera_identity.domain.account import ExternalIdentity
from tests.shared.fixtures.factories import TestAccountFactory


@pytest.fixture
def google_identity() -> ExternalIdentity:
    return TestAccountFactory.bob_identity()
