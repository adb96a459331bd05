# Purpose: Response payload parsing, citation extraction and source attachment.

import json
from types import SimpleNamespace

import pytest

from quantedge_agents.llm.response import (
    DEFAULT_SOURCE_TITLE,
    attach_sources,
    extract_sources,
    parse_results_payload,
    results_from_response,
)
from quantedge_agents.errors import EmptyResponse, MalformedResponse


@pytest.mark.parametrize("text", [None, "", "   \n"])
def test_empty_payload_raises_empty_response(text):
    with pytest.raises(EmptyResponse):
        parse_results_payload(text)


@pytest.mark.parametrize(
    "text",
    [
        "not json at all",
        '{"results": [',
        '{"items": []}',
        '[{"ticker": "AAPL"}]',
        '{"results": {"ticker": "AAPL"}}',
        '{"results": [{"ticker": "AAPL"}]}',
    ],
)
def test_malformed_payload_raises(text):
    with pytest.raises(MalformedResponse):
        parse_results_payload(text)


def test_one_bad_record_fails_whole_batch(payload_factory):
    good = payload_factory("AAPL")
    bad = payload_factory("NVDA", finalRecommendation="Moon")
    with pytest.raises(MalformedResponse):
        parse_results_payload(json.dumps({"results": [good, bad]}))


def test_parses_batch_in_payload_order(batch_text):
    results = parse_results_payload(batch_text("NVDA", "AAPL"))
    assert [r.ticker for r in results] == ["NVDA", "AAPL"]


def test_empty_results_array_parses_to_empty_list():
    assert parse_results_payload('{"results": []}') == []


def test_code_fenced_json_is_accepted(batch_text):
    text = "```json\n" + batch_text("MSFT") + "\n```"
    assert [r.ticker for r in parse_results_payload(text)] == ["MSFT"]


def test_sources_capped_at_five_in_original_order(fake_response, grounding_chunks):
    response = fake_response("{}", grounding_chunks(10))
    sources = extract_sources(response)
    assert len(sources) == 5
    assert [s.uri for s in sources] == [f"https://example.com/{i}" for i in range(5)]


def test_sources_default_title_and_drop_missing_uri(fake_response):
    chunks = [
        SimpleNamespace(web=SimpleNamespace(title=None, uri="https://a.example")),
        SimpleNamespace(web=SimpleNamespace(title="No link", uri=None)),
        SimpleNamespace(web=None),
        SimpleNamespace(web=SimpleNamespace(title="  ", uri="https://b.example")),
        SimpleNamespace(web=SimpleNamespace(title="Reuters", uri="https://c.example")),
    ]
    sources = extract_sources(fake_response("{}", chunks))
    assert [(s.title, s.uri) for s in sources] == [
        (DEFAULT_SOURCE_TITLE, "https://a.example"),
        (DEFAULT_SOURCE_TITLE, "https://b.example"),
        ("Reuters", "https://c.example"),
    ]


def test_sources_from_camel_case_dict_payload():
    response = {
        "candidates": [
            {"groundingMetadata": {"groundingChunks": [{"web": {"uri": "https://x.example", "title": "X"}}]}}
        ]
    }
    assert [s.uri for s in extract_sources(response)] == ["https://x.example"]


def test_no_candidates_means_no_sources():
    assert extract_sources(SimpleNamespace(text="{}", candidates=None)) == []


def test_same_sources_attached_to_every_result(fake_response, grounding_chunks, batch_text):
    response = fake_response(batch_text("AAPL", "NVDA", "MSFT"), grounding_chunks(7))
    results = results_from_response(response)
    assert len(results) == 3
    first = results[0].sources
    assert len(first) == 5
    assert all(r.sources == first for r in results)


def test_attach_sources_does_not_mutate_input(result_factory, fake_response, grounding_chunks):
    original = result_factory()
    updated = attach_sources([original], extract_sources(fake_response("{}", grounding_chunks(2))))
    assert original.sources == []
    assert len(updated[0].sources) == 2
