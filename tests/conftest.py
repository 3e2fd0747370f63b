"""Pytest configuration and fixtures."""

import io
import json

import httpx
import pytest
from PIL import Image

from menusnap.models.menu import MenuItem


def make_image_bytes(
    size: tuple[int, int] = (120, 80),
    fmt: str = "JPEG",
    color: tuple[int, int, int] = (200, 30, 30),
) -> bytes:
    """Encode a solid-color image."""
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


def make_noise_image(size: tuple[int, int] = (300, 300)) -> Image.Image:
    """Gaussian noise compresses badly, which makes byte budgets easy to exceed."""
    return Image.effect_noise(size, 100).convert("RGB")


def envelope(text: str) -> dict:
    """A Messages API success body wrapping the given answer text."""
    return {
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
        "stop_reason": "end_turn",
    }


@pytest.fixture
def small_jpeg() -> bytes:
    return make_image_bytes()


@pytest.fixture
def salad_text() -> str:
    return (
        'Here you go: [{"name":"Salad","healthScore":9,"healthReason":"fresh veg",'
        '"description":null,"calories":null}] Hope that helps!'
    )


@pytest.fixture
def menu_items() -> list[MenuItem]:
    """Unsorted items, two of them tied on score."""
    return [
        MenuItem(name="Fries", health_score=2, health_reason="deep fried"),
        MenuItem(name="Grilled Fish", health_score=8, health_reason="lean protein"),
        MenuItem(name="Pasta", health_score=5, health_reason="refined carbs"),
        MenuItem(name="Garden Salad", health_score=8, health_reason="vegetables"),
    ]


@pytest.fixture
def mock_api():
    """
    Build an httpx.MockTransport that answers every request with a fixed
    response and records the requests it saw.

    Usage:
        transport, requests = mock_api(200, json=envelope("[]"))
    """

    def factory(status_code: int = 200, *, json_body=None, text: str | None = None):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if json_body is not None:
                return httpx.Response(status_code, content=json.dumps(json_body).encode(),
                                      headers={"content-type": "application/json"})
            return httpx.Response(status_code, text=text or "")

        return httpx.MockTransport(handler), seen

    return factory
