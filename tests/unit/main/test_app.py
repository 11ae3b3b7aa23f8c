from __future__ import annotations

import pytest

from healthwatch.main import app as module_app
from healthwatch.main.app import create_app


@pytest.mark.asyncio
async def test_create_app_initializes_lifespan() -> None:
    app = create_app()
    assert app.title

    paths = set(app.openapi()["paths"])
    assert "/" in paths
    assert "/api/health" in paths
    assert "/api/health/checks/{check_id}/execute" in paths

    async with app.router.lifespan_context(app):
        assert app.state.started_at is not None

    assert isinstance(module_app.app, type(app))
