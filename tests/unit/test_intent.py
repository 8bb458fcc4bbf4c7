"""Unit tests for two-pass intent classification"""

import pytest
from liquidity_gateway.domain.exceptions import LLMServiceError
from liquidity_gateway.domain.intent import extract_intent, parse_intent_response
from liquidity_gateway.domain.models import Intent
from liquidity_gateway.prompts import CHAT_INTENT_PROMPT, CHAT_SOFT_INTENT_PROMPT
from conftest import intent_json


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "not json at all",
        "[]",
        '"balance_query"',
        '{"intent": "transfer_money", "params": {}}',
        '{"intent": null}',
        '{"intent": "balance_query", "params": [1, 2]}',
        '{"params": {}}',
    ],
)
def test_parse_intent_response_malformed_is_unknown(text):
    result = parse_intent_response(text)
    assert result.intent is Intent.UNKNOWN
    assert result.params == {}


def test_parse_intent_response_missing_params_reads_as_empty():
    result = parse_intent_response('{"intent": "general"}')
    assert result.intent is Intent.GENERAL
    assert result.params == {}


def test_parse_intent_response_keeps_params():
    result = parse_intent_response(intent_json("affordability_check", {"amount": 150, "timeframe": "tomorrow"}))
    assert result.intent is Intent.AFFORDABILITY_CHECK
    assert result.params == {"amount": 150, "timeframe": "tomorrow"}


async def test_first_pass_result_is_final(stub_llm_factory):
    classifier = stub_llm_factory([intent_json("balance_query")])

    result = await extract_intent("What's my balance?", classifier)

    assert result.intent is Intent.BALANCE_QUERY
    assert result.passes == 1
    assert len(classifier.classify_calls) == 1
    assert classifier.classify_calls[0] == (CHAT_INTENT_PROMPT, "What's my balance?")


@pytest.mark.parametrize(
    "intent,params",
    [
        ("balance_query", {}),
        ("projection_query", {}),
        ("spending_query", {}),
        ("general", {}),
        ("affordability_check", {"amount": 150, "timeframe": "tomorrow"}),
    ],
)
async def test_second_pass_resolves_colloquial_questions(stub_llm_factory, intent, params):
    classifier = stub_llm_factory([intent_json("unknown"), intent_json(intent, params)])

    result = await extract_intent("something colloquial", classifier)

    assert result.intent.value == intent
    assert result.params == params
    assert result.passes == 2
    assert [call[0] for call in classifier.classify_calls] == [CHAT_INTENT_PROMPT, CHAT_SOFT_INTENT_PROMPT]


async def test_unknown_after_both_passes(stub_llm_factory):
    classifier = stub_llm_factory([intent_json("unknown"), intent_json("unknown")])

    result = await extract_intent("asdfghjkl", classifier)

    assert result.intent is Intent.UNKNOWN
    assert result.params == {}
    assert len(classifier.classify_calls) == 2


@pytest.mark.parametrize("params", [{}, {"amount": None}, {"timeframe": "tomorrow"}])
async def test_second_pass_affordability_without_amount_is_downgraded(stub_llm_factory, params):
    classifier = stub_llm_factory([intent_json("unknown"), intent_json("affordability_check", params)])

    result = await extract_intent("Can I swing it tomorrow?", classifier)

    assert result.intent is Intent.UNKNOWN
    assert result.params == {}


async def test_first_pass_malformed_output_triggers_second_pass(stub_llm_factory):
    classifier = stub_llm_factory(["Sure! The intent is balance.", intent_json("balance_query")])

    result = await extract_intent("How am I doing?", classifier)

    assert result.intent is Intent.BALANCE_QUERY
    assert len(classifier.classify_calls) == 2


async def test_never_more_than_two_calls(stub_llm_factory):
    classifier = stub_llm_factory(["garbage", "more garbage", intent_json("general")])

    result = await extract_intent("???", classifier)

    assert result.intent is Intent.UNKNOWN
    assert len(classifier.classify_calls) == 2


async def test_classifier_failure_propagates(stub_llm_factory):
    classifier = stub_llm_factory([LLMServiceError("Language model error: 500")])

    with pytest.raises(LLMServiceError):
        await extract_intent("What's my balance?", classifier)

    assert len(classifier.classify_calls) == 1
