"""
Pytest configuration & shared fixtures.
"""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from jsontransform.main import create_app


@pytest.fixture
def person_map() -> dict[str, Any]:
    """Two destination groups, one reusing a source field of the other."""
    return {
        "person": {
            "firstname": "firstname",
            "lastname": "lastname",
            "email": "email",
            "userID": "userID",
            "photolastupdated": "lastupdated",
            "sgs": "sgs",
        },
        "card": {
            "mifare": "currentMifareID",
            "idnumber": "userID",
            "lastupdated": "cardlastupdated",
        },
    }


@pytest.fixture
def person_document() -> dict[str, Any]:
    return {
        "firstname": "Jane",
        "lastname": "Doe",
        "email": "jane.doe@example.org",
        "userID": "5061011",
        "lastupdated": "2016-03-01T09:30:00",
        "cardlastupdated": "2016-02-11T14:00:00",
        "currentMifareID": "04A224B2C93C80",
        "deleted": False,
        "tag": 3,
        "sgs": {"sg1": "sg1val", "sg2": "sg2val", "sg3": "sg3val"},
    }


@pytest_asyncio.fixture
async def app(person_map: dict[str, Any]) -> AsyncIterator[FastAPI]:
    """Provide a fresh FastAPI app with the default map in state."""
    application = create_app()

    # Lifespan does not run under ASGITransport; set what it would load
    application.state.default_map = person_map
    yield application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Provide an async test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as ac:
        yield ac
