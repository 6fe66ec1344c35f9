import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain.entities  # noqa: F401
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.utils.jwt import generate_jwt
from src.depends import get_unit_of_work


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine):
    from config import ApplicationConfig
    from src.api.app import create_app

    app = create_app(ApplicationConfig)
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_unit_of_work():
        async with Session() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def auth(user_id: str) -> dict:
    return {"Authorization": f"Bearer {generate_jwt(user_id)}"}


@pytest.fixture
def register(client):
    """Create a profile for user_id and return its auth headers"""

    async def _register(user_id: str, username: str = None) -> dict:
        headers = auth(user_id)
        response = await client.put(
            "/users/me",
            json={"username": username or user_id.replace("-", "_"), "display_name": user_id},
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return headers

    return _register


@pytest.fixture
def create_group(client):
    async def _create_group(headers: dict, name: str = "Climbing Club") -> str:
        response = await client.post("/groups", json={"name": name}, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return _create_group


@pytest.fixture
def add_member(client):
    """Invite user directly and accept; returns the invitee's headers"""

    async def _add_member(
        group_id: str, inviter_headers: dict, user_id: str, headers: dict, role: str = None
    ):
        payload = {"type": "direct_user_id", "invitee_id": user_id}
        if role:
            payload["role"] = role
        invite = await client.post(
            f"/groups/{group_id}/invitations", json=payload, headers=inviter_headers
        )
        assert invite.status_code == 201, invite.text
        accept = await client.post(
            f"/invitations/{invite.json()['id']}/accept", headers=headers
        )
        assert accept.status_code == 200, accept.text
        return headers

    return _add_member


@pytest.fixture
def auth_for():
    return auth
