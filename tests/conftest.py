import pytest
from httpx import AsyncClient, ASGITransport

from main import create_app
from config.test import TestingSettings
from core.context import AppContext
from db import init_db
from db_models.user import User, UserStatus


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    # A file database so separate sessions use separate connections
    return TestingSettings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'garments_test.db'}")


@pytest.fixture
async def app_context(settings):
    context = AppContext.from_settings(settings)
    await init_db(context.engine)
    yield context
    await context.dispose()


@pytest.fixture
async def db_session(app_context):
    async with app_context.session_factory() as session:
        yield session


@pytest.fixture
def fastapi_app(app_context):
    return create_app(context=app_context)


@pytest.fixture
async def async_client(fastapi_app):
    # https so the secure session cookie is stored and sent back
    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="https://testserver") as ac:
        yield ac


async def create_user(
    context: AppContext,
    *,
    name: str,
    email: str,
    password: str,
    role: str,
    status: str = UserStatus.ACTIVE.value,
) -> User:
    """Insert a user directly, bypassing the registration role restriction."""
    async with context.session_factory() as session:
        user = User(
            name=name,
            email=email,
            hashed_password=context.hasher.hash(password),
            role=role,
            status=status,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


def token_for(context: AppContext, user: User) -> str:
    return context.tokens.issue({"sub": str(user.id), "email": user.email, "role": user.role})


def headers_for(context: AppContext, user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(context, user)}"}


@pytest.fixture
async def admin_user(app_context):
    return await create_user(
        app_context, name="Test Admin", email="admin@garments.com", password="adminpass", role="admin"
    )


@pytest.fixture
async def manager_user(app_context):
    return await create_user(
        app_context, name="Test Manager", email="manager@garments.com", password="managerpass", role="manager"
    )


@pytest.fixture
async def buyer_user(app_context):
    return await create_user(
        app_context, name="Test Buyer", email="buyer@garments.com", password="buyerpass", role="buyer"
    )


@pytest.fixture
async def other_buyer(app_context):
    return await create_user(
        app_context, name="Other Buyer", email="other@garments.com", password="otherpass", role="buyer"
    )


@pytest.fixture
def admin_headers(app_context, admin_user):
    """Return authorization headers for admin user."""
    return headers_for(app_context, admin_user)


@pytest.fixture
def manager_headers(app_context, manager_user):
    """Return authorization headers for manager user."""
    return headers_for(app_context, manager_user)


@pytest.fixture
def buyer_headers(app_context, buyer_user):
    """Return authorization headers for buyer user."""
    return headers_for(app_context, buyer_user)


@pytest.fixture
def other_buyer_headers(app_context, other_buyer):
    return headers_for(app_context, other_buyer)
