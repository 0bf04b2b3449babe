import json

import pytest

from askdata import llm


@pytest.fixture
def city_temps() -> list[dict]:
    return [
        {"city": "A", "temp": 10},
        {"city": "A", "temp": 30},
        {"city": "B", "temp": 20},
    ]


@pytest.fixture
def sales_rows() -> list[dict]:
    """60 rows: region/category strings, numeric amount and units, ISO dates."""
    rows = []
    for i in range(60):
        rows.append({
            "region": ["North", "South", "East"][i % 3],
            "date": f"2024-01-{(i % 28) + 1:02d}",
            "amount": 100 + i,
            "units": str(i % 5),
            "note": f"order {i}",
        })
    rows[59]["amount"] = 10_000
    return rows


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace llm.chat with a stub returning the given payload.

    Call the fixture with a dict (sent as JSON), a raw string, or an exception.
    The returned list records every (system, user) prompt pair it received.
    """
    calls: list[tuple[str, str]] = []

    def configure(response):
        async def chat(system_prompt: str, user_message: str) -> tuple[str, str]:
            calls.append((system_prompt, user_message))
            if isinstance(response, Exception):
                raise response
            if isinstance(response, dict):
                return json.dumps(response), "stop"
            return response, "stop"

        monkeypatch.setattr(llm, "chat", chat)
        return calls

    return configure
