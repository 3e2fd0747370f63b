"""Tests for the command-line driver."""

from unittest.mock import AsyncMock, patch

import pytest

from conftest import make_image_bytes
from menusnap.core.config import Settings
from menusnap.main import analyze, format_state, parse_args
from menusnap.models import AnalysisState, MenuItem

ANALYZE_MENU = "menusnap.services.menu_analysis.client.MenuExtractionClient.analyze_menu"


def test_parse_args_requires_image_without_history():
    with pytest.raises(SystemExit):
        parse_args([])


def test_parse_args_history():
    args = parse_args(["--history"])
    assert args.history is True
    assert args.image is None


def test_format_success():
    state = AnalysisState.success(
        [
            MenuItem(name="Salad", health_score=9, health_reason="fresh veg", calories="250"),
            MenuItem(name="Fries", health_score=2, health_reason="deep fried"),
        ]
    )

    output = format_state(state)

    lines = output.splitlines()
    assert lines[0] == "  1. [ 9] Healthy      Salad | 250"
    assert lines[1].strip() == "fresh veg"
    assert "Less Healthy" in lines[2]
    assert "Fries" in lines[2]


def test_format_error():
    assert format_state(AnalysisState.failure("rate limited")) == "Error: rate limited"


@pytest.mark.asyncio
async def test_analyze_saves_successful_scan(tmp_path, capsys):
    image_path = tmp_path / "menu.jpg"
    image_path.write_bytes(make_image_bytes())
    items = [MenuItem(name="Salad", health_score=9)]

    with patch(ANALYZE_MENU, AsyncMock(return_value=items)), \
            patch("menusnap.main.MongoDB") as mock_mongo, \
            patch("menusnap.main.MenuScanRepository") as mock_repo_cls:
        mock_repo_cls.return_value.ensure_indexes = AsyncMock()
        mock_repo_cls.return_value.save = AsyncMock(return_value="scan-1")

        code = await analyze(Settings(anthropic_api_key="k"), image_path, "  Joe's  ")

    assert code == 0
    mock_repo_cls.return_value.ensure_indexes.assert_awaited_once()
    saved = mock_repo_cls.return_value.save.call_args.args[0]
    assert saved.restaurant_name == "Joe's"
    assert [i.name for i in saved.items] == ["Salad"]
    mock_mongo.return_value.close.assert_called_once()
    assert "Saved scan" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_analyze_failure_returns_nonzero(tmp_path):
    image_path = tmp_path / "menu.jpg"
    image_path.write_bytes(make_image_bytes())

    with patch(ANALYZE_MENU, AsyncMock(return_value=[])), \
            patch("menusnap.main.MongoDB") as mock_mongo:
        code = await analyze(Settings(anthropic_api_key="k"), image_path, "Joe's")

    assert code == 1
    mock_mongo.assert_not_called()
