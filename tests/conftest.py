import os
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables - use in-memory SQLite for testing
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from gamepanel.core.database import Base, get_db  # noqa: E402
from gamepanel.models import Service, ServiceOption, Variable  # noqa: E402
from gamepanel.api.v1 import health, options, services  # noqa: E402

ASYNC_TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

CONFIG_STARTUP = '{"done": ")! For help, type ", "userInteraction": ["Go to eula.txt for more info."]}'
CONFIG_LOGS = '{"custom": false, "location": "logs/latest.log"}'
CONFIG_FILES = '{"server.properties": {"parser": "properties", "find": {"server-port": "{{server.build.default.port}}"}}}'


# =============================================================================
# Test App Fixture
# =============================================================================

@pytest.fixture(scope="session")
def test_app():
    """Create test FastAPI app with the v1 routers."""
    app = FastAPI()
    app.include_router(services.router, prefix="/api/v1")
    app.include_router(options.router, prefix="/api/v1")
    app.include_router(health.router)
    return app


# =============================================================================
# Database Session Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def async_db_session():
    """Create a fresh ASYNC database session for each test."""
    engine = create_async_engine(
        ASYNC_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def async_client(test_app, async_db_session):
    """Create async test client with ASYNC database override."""
    import httpx

    async def override_get_db():
        yield async_db_session

    test_app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    test_app.dependency_overrides.clear()


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def option_payload():
    """Build a valid create payload, overriding any field by keyword."""
    def build(service_id, **overrides):
        data = {
            "service_id": service_id,
            "name": "Vanilla",
            "description": "Vanilla Minecraft server",
            "tag": "vanilla",
            "docker_image": "quay.io/pterodactyl/core:java",
            "startup": "java -Xms128M -Xmx{{SERVER_MEMORY}}M -jar {{SERVER_JARFILE}}",
            "config_startup": CONFIG_STARTUP,
            "config_stop": "stop",
            "config_logs": CONFIG_LOGS,
            "config_files": CONFIG_FILES,
        }
        data.update(overrides)
        return data
    return build


@pytest_asyncio.fixture
async def sample_service(async_db_session):
    """Create a sample service"""
    service = Service(name="Minecraft", description="Minecraft - the classic game from Mojang.")
    async_db_session.add(service)
    await async_db_session.commit()
    await async_db_session.refresh(service)
    return service


@pytest_asyncio.fixture
async def other_service(async_db_session):
    """Create a second service for cross-service checks"""
    service = Service(name="Source Engine", description="Includes support for most Source Dedicated Server games.")
    async_db_session.add(service)
    await async_db_session.commit()
    await async_db_session.refresh(service)
    return service


@pytest_asyncio.fixture
async def sample_option(async_db_session, sample_service):
    """Create a fully configured option without a parent"""
    option = ServiceOption(
        service_id=sample_service.id,
        name="Vanilla",
        description="Vanilla Minecraft server",
        tag="vanilla",
        docker_image="quay.io/pterodactyl/core:java",
        config_startup=CONFIG_STARTUP,
        config_stop="stop",
        config_logs=CONFIG_LOGS,
        config_files=CONFIG_FILES,
        script_install="#!/bin/ash\ncurl -o server.jar https://example.com/server.jar",
    )
    async_db_session.add(option)
    await async_db_session.commit()
    await async_db_session.refresh(option)
    return option


@pytest_asyncio.fixture
async def child_option(async_db_session, sample_option):
    """Create an option inheriting its configuration from sample_option"""
    option = ServiceOption(
        service_id=sample_option.service_id,
        name="Spigot",
        description="Spigot server",
        tag="spigot",
        config_from=sample_option.id,
    )
    async_db_session.add(option)
    await async_db_session.commit()
    await async_db_session.refresh(option)
    return option


@pytest_asyncio.fixture
async def option_variables(async_db_session, sample_option):
    """Attach two variables to sample_option"""
    variables = [
        Variable(
            option_id=sample_option.id,
            name="Server Jar File",
            env_variable="SERVER_JARFILE",
            default_value="server.jar",
            user_viewable=True,
            user_editable=True,
            rules="required|regex:/^([\\w\\d._-]+)(\\.jar)$/",
        ),
        Variable(
            option_id=sample_option.id,
            name="Server Version",
            env_variable="VANILLA_VERSION",
            default_value="latest",
            user_viewable=True,
            user_editable=True,
            rules="required|string|between:3,7",
        ),
    ]
    async_db_session.add_all(variables)
    await async_db_session.commit()
    for variable in variables:
        await async_db_session.refresh(variable)
    return variables
