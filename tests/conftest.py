"""Shared test fixtures: the ASGI client and MBP-10 CSV bodies."""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient

from src.dr_ingest.domain.parser import MBP10_COLUMNS
from src.main import app


def make_csv(n_rows: int) -> bytes:
    """MBP-10 CSV with one bid and one ask level per row; prices move with the row."""
    lines = [",".join(MBP10_COLUMNS)]
    for i in range(n_rows):
        bid = f"{61.70 + i / 100:.9f}"
        ask = f"{61.72 + i / 100:.9f}"
        levels = [bid, "500", ask, "300"] + [""] * 36
        lines.append(",".join([f"2024-01-02T14:30:{i:02d}Z", *levels]))
    return ("\n".join(lines) + "\n").encode()


@pytest.fixture
def mbp10_csv() -> Callable[[int], bytes]:
    return make_csv


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Replay API client; requests go straight to the app, no server socket."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://replay.test") as ac:
        yield ac
