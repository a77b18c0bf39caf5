"""Tests for the cross-district synthesis stage."""

import pytest

from src.config import DISTRICT_SEPARATOR
from src.exceptions import GenerationError
from src.pipeline.ai_processor.client import GenerationParams
from src.pipeline.ai_processor.synthesizer import (
    ReportSynthesizer,
    build_synthesis_prompt,
    combine_analyses,
)


def test_combine_uses_separator():
    assert combine_analyses(["one", "two"]) == (
        "one\n\n---DISTRICT SEPARATOR---\n\ntwo"
    )
    assert combine_analyses(["only"]) == "only"
    assert combine_analyses([]) == ""


def test_prompt_asks_for_essay_and_embeds_analyses():
    prompt = build_synthesis_prompt("A" + DISTRICT_SEPARATOR + "B")
    assert prompt.endswith(
        "these district pattern analyses: A\n\n---DISTRICT SEPARATOR---\n\nB"
    )
    assert "no bullet points" in prompt
    assert "one page" in prompt


@pytest.mark.asyncio
async def test_single_call_with_deterministic_params(fake_generator):
    generator = fake_generator(synthesis_text="The report.")
    report = await ReportSynthesizer(generator).synthesize(["x", "y"])
    assert report == "The report."
    assert len(generator.prompts) == 1
    assert generator.prompts[0] == build_synthesis_prompt(combine_analyses(["x", "y"]))
    assert generator.params == [GenerationParams()]


@pytest.mark.asyncio
async def test_empty_analyses_still_calls_service(fake_generator):
    generator = fake_generator()
    report = await ReportSynthesizer(generator).synthesize([])
    assert report == "FINAL REPORT"
    assert generator.prompts[0].endswith("these district pattern analyses: ")


@pytest.mark.asyncio
async def test_failure_propagates(fake_generator):
    generator = fake_generator(fail_synthesis=True)
    with pytest.raises(GenerationError):
        await ReportSynthesizer(generator).synthesize(["x"])


@pytest.mark.asyncio
async def test_structured_format_is_not_used_for_the_report(fake_generator):
    generator = fake_generator()
    params = GenerationParams(response_format="structured")
    await ReportSynthesizer(generator, params).synthesize(["x"])
    assert generator.params == [GenerationParams(response_format="text")]
