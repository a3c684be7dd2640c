from __future__ import annotations

from datetime import datetime

import pytest

from fakes import InMemoryVisits


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday; the week started on Sunday 2026-10-11
    return datetime(2026, 10, 14, 9, 0, 0)


@pytest.fixture
def visits_repo() -> InMemoryVisits:
    return InMemoryVisits()
