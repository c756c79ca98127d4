"""Tests for AI list generation."""

from unittest.mock import MagicMock, patch

import pytest

from blueprint import DataListItem
from clients.ai import PROMPT_TEMPLATE, BreakerListener, GenerationError, ListItemGenerator, LIST_ITEM_SCHEMA


@pytest.fixture
def generator(mock_gemini_model):
    return ListItemGenerator(mock_gemini_model, fail_max=2, reset_timeout=60)


@pytest.mark.unit
def test_generates_validated_items(generator, mock_gemini_model):
    items = generator.generate_list_items("  top tech stocks  ")

    assert items == [
        DataListItem(id="1", title="AAPL", subtitle="Apple", value="$190", badge="Buy"),
        DataListItem(id="2", title="MSFT", value="$410"),
    ]
    prompt, schema = mock_gemini_model.generate_json.call_args.args
    assert prompt == PROMPT_TEMPLATE.format(request="top tech stocks")
    assert schema is LIST_ITEM_SCHEMA


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        '```json\n[{"id": 1, "title": "One"}]\n```',
        '{"items": [{"id": "1", "title": "One"}]}',
        '{"id": "1", "title": "One"}',
    ],
)
def test_tolerates_wrapped_output(generator, mock_gemini_model, raw):
    mock_gemini_model.generate_json.return_value = raw

    assert generator.generate_list_items("one") == [DataListItem(id="1", title="One")]


@pytest.mark.unit
@pytest.mark.parametrize("raw", ["", "[]", '[{"subtitle": "no id or title"}]'])
def test_unusable_output_is_generation_error(generator, mock_gemini_model, raw):
    mock_gemini_model.generate_json.return_value = raw

    with pytest.raises(GenerationError) as exc_info:
        generator.generate_list_items("anything")

    assert str(exc_info.value) == "generation failed"


@pytest.mark.unit
def test_upstream_error_is_wrapped(generator, mock_gemini_model):
    mock_gemini_model.generate_json.side_effect = RuntimeError("quota exceeded: key=secret")

    with pytest.raises(GenerationError) as exc_info:
        generator.generate_list_items("anything")

    assert "secret" not in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.unit
def test_breaker_opens_after_repeated_failures(generator, mock_gemini_model):
    mock_gemini_model.generate_json.side_effect = RuntimeError("down")

    for _ in range(3):
        with pytest.raises(GenerationError):
            generator.generate_list_items("anything")

    assert generator.breaker_state == "open"
    # Open breaker short-circuits without calling the model
    assert mock_gemini_model.generate_json.call_count == 2


@pytest.mark.unit
def test_breaker_listener_logs_transitions():
    breaker = MagicMock()
    breaker.name = "gemini-list"

    with patch("clients.ai.logger") as logger:
        BreakerListener().state_change(breaker, "closed", "open")

    logger.warning.assert_called_once_with(
        "breaker_state_change", breaker="gemini-list", from_state="closed", to_state="open"
    )


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_variant(generator):
    items = await generator.agenerate_list_items("stocks")
    assert [item.title for item in items] == ["AAPL", "MSFT"]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_async_variant_raises_generation_error(generator, mock_gemini_model):
    mock_gemini_model.generate_json.return_value = "not json at all"

    with pytest.raises(GenerationError):
        await generator.agenerate_list_items("stocks")
