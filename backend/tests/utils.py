"""Helpers shared by fixtures and tests that need a differently configured app."""

from httpx import ASGITransport, AsyncClient


def build_app(settings):
    """A fresh application over the database named by `settings`."""
    from quillpost.main import create_app
    return create_app(settings)


async def open_client(app) -> AsyncClient:
    """
    Apply the schema the way the lifespan does, then return a client.

    ASGITransport does not run lifespan events, so the schema step is
    called directly. Logging setup is skipped to leave pytest's capture alone.
    """
    await app.state.database.init_schema()
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")
