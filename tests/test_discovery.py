"""Tests for corpus search and retrieval-augmented discovery."""

import json
import pytest
from unittest.mock import MagicMock

from content.discovery import (
    DiscoveryService,
    parse_failure_thoughts,
    parse_json_response,
    retrieval_only_thoughts,
)
from content.vector_store import SEED_DOCUMENTS, VectorStoreService
from models.schemas import VectorDocument


RAG_PAYLOAD = {
    "analysis": "The learner wants practical data analysis skills.",
    "curriculumStructure": {"title": "Data Science Path", "description": "From arrays to models", "modules": []},
    "thoughts": ["Read the query", "Matched pandas material", "Ordered the modules", "Finalized", "Extra"],
}


@pytest.fixture
def vector_store():
    return VectorStoreService()


# ===== Vector Store Tests =====

@pytest.mark.asyncio
async def test_search_ranks_by_similarity(vector_store):
    result = await vector_store.search("python")

    similarities = [doc.similarity for doc in result['documents']]
    assert similarities == sorted(similarities, reverse=True)
    assert result['totalFound'] == len(result['documents'])
    assert all(isinstance(doc, VectorDocument) for doc in result['documents'])


@pytest.mark.asyncio
async def test_search_is_case_insensitive_substring(vector_store):
    result = await vector_store.search("MATPLOTLIB")

    titles = [doc.title for doc in result['documents']]
    assert 'Data Visualization with Matplotlib' in titles
    assert 'Python for Data Science Handbook' in titles


@pytest.mark.asyncio
async def test_search_ties_keep_corpus_order(vector_store):
    """Documents 3 and 5 share a similarity of 0.87 and stay in corpus order."""
    result = await vector_store.search("data")

    tied = [doc.id for doc in result['documents'] if doc.similarity == 0.87]
    assert tied == ['3', '5']


@pytest.mark.asyncio
async def test_search_respects_limit(vector_store):
    result = await vector_store.search("python", limit=2)

    assert [doc.id for doc in result['documents']] == ['1', '4']
    assert result['totalFound'] == 2


@pytest.mark.asyncio
async def test_search_no_match(vector_store):
    result = await vector_store.search("quantum chromodynamics")

    assert result == {'documents': [], 'totalFound': 0}


@pytest.mark.asyncio
async def test_stats_and_status(vector_store):
    stats = await vector_store.get_stats()
    status = await vector_store.get_status()

    assert stats['documentCount'] == len(SEED_DOCUMENTS)
    assert stats['vectorDimensions'] == 1536
    assert stats['indexType'] == 'cosine'
    assert status['status'] == 'connected'
    assert status['healthy'] is True


@pytest.mark.asyncio
async def test_added_document_is_searchable(vector_store):
    vector_store.add_document(VectorDocument(
        id='7', title='Rust Ownership', type='Module', similarity=0.99, snippet='Borrowing rules.'
    ))

    result = await vector_store.search("ownership")

    assert [doc.id for doc in result['documents']] == ['7']


# ===== JSON Response Parsing Tests =====

def test_fenced_and_bare_json_parse_identically():
    bare = json.dumps(RAG_PAYLOAD)

    assert parse_json_response(bare) == RAG_PAYLOAD
    assert parse_json_response(f"```json\n{bare}\n```") == RAG_PAYLOAD
    assert parse_json_response(f"Here you go:\n```\n{bare}\n```") == RAG_PAYLOAD


def test_non_object_json_rejected():
    with pytest.raises(ValueError):
        parse_json_response("[1, 2, 3]")
    with pytest.raises(ValueError):
        parse_json_response("not json at all")


# ===== Discovery Service Tests =====

@pytest.mark.asyncio
async def test_no_documents_skips_provider(vector_store, mock_provider, resolver_for):
    resolver = resolver_for(mock_provider)
    service = DiscoveryService(vector_store, provider_resolver=resolver)

    result = await service.discover("quantum chromodynamics")

    assert result.documents == []
    assert len(result.thoughts) == 1
    assert 'quantum chromodynamics' in result.thoughts[0]
    assert result.analysis is None
    assert result.curriculumStructure is None
    resolver.assert_not_called()
    mock_provider.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_discover_uses_provider_json(vector_store, mock_provider, resolver_for):
    mock_provider.complete.return_value = f"```json\n{json.dumps(RAG_PAYLOAD)}\n```"
    service = DiscoveryService(vector_store, provider_resolver=resolver_for(mock_provider))

    result = await service.discover("pandas")

    assert result.analysis == RAG_PAYLOAD['analysis']
    assert result.curriculumStructure == RAG_PAYLOAD['curriculumStructure']
    assert result.thoughts == RAG_PAYLOAD['thoughts'][:4]
    assert [doc.id for doc in result.documents] == ['1', '2', '5']

    prompt = "\n".join(m.content for m in mock_provider.complete.await_args.args[0])
    assert 'USER QUERY: pandas' in prompt
    assert 'Document 1 (Python for Data Science Handbook, Similarity: 94.0%)' in prompt


@pytest.mark.asyncio
async def test_discover_malformed_json_falls_back(vector_store, mock_provider, resolver_for):
    mock_provider.complete.return_value = "I think you should learn pandas first. " * 20
    service = DiscoveryService(vector_store, provider_resolver=resolver_for(mock_provider))

    result = await service.discover("pandas")

    assert result.analysis.endswith("...")
    assert len(result.analysis) == 203
    assert result.curriculumStructure['title'] == 'Curriculum for pandas'
    assert result.curriculumStructure['modules'] == []
    assert result.thoughts == parse_failure_thoughts("pandas")


@pytest.mark.asyncio
async def test_discover_missing_thoughts_uses_fixed_list(vector_store, mock_provider, resolver_for):
    payload = {"analysis": "ok", "curriculumStructure": {"title": "t"}}
    mock_provider.complete.return_value = json.dumps(payload)
    service = DiscoveryService(vector_store, provider_resolver=resolver_for(mock_provider))

    result = await service.discover("numpy")

    assert result.thoughts == parse_failure_thoughts("numpy")
    assert len(result.thoughts) == 4


@pytest.mark.asyncio
async def test_discover_provider_failure_keeps_documents(vector_store, failing_provider, resolver_for):
    service = DiscoveryService(vector_store, provider_resolver=resolver_for(failing_provider))

    result = await service.discover("python")

    assert len(result.documents) > 0
    assert result.thoughts == retrieval_only_thoughts("python")
    assert result.analysis is None


@pytest.mark.asyncio
async def test_analyze_query(vector_store, mock_provider, resolver_for):
    mock_provider.complete.return_value = "The learner needs fundamentals."
    service = DiscoveryService(vector_store, provider_resolver=resolver_for(mock_provider))

    result = await service.analyze_query("teach me python")

    assert result == {'analysis': "The learner needs fundamentals.", 'query': "teach me python"}


def test_result_to_dict_is_serializable(vector_store):
    service = DiscoveryService(vector_store, provider_resolver=MagicMock())
    shaped = service.shape_response("sql", json.dumps(RAG_PAYLOAD))

    assert json.loads(json.dumps(shaped))['analysis'] == RAG_PAYLOAD['analysis']


def test_fences_inside_json_strings_are_kept():
    payload = {
        "analysis": "Loops, e.g.\n```python\nfor x in y:\n    pass\n```",
        "curriculumStructure": {"title": "Loops"},
        "thoughts": ["a", "b", "c", "d"],
    }
    bare = json.dumps(payload)

    assert parse_json_response(bare) == payload
    assert parse_json_response(f"```json\n{bare}\n```") == payload
    assert parse_json_response(f"Result:\n```\n{bare}\n```") == payload


@pytest.mark.asyncio
async def test_discover_keeps_thoughts_when_analysis_has_code(vector_store, mock_provider, resolver_for):
    mock_provider.complete.return_value = json.dumps({
        "analysis": "Start with:\n```python\nprint('hi')\n```",
        "curriculumStructure": {"title": "Python", "modules": []},
        "thoughts": ["a", "b", "c", "d"],
    })
    service = DiscoveryService(vector_store, provider_resolver=resolver_for(mock_provider))

    result = await service.discover("python")

    assert result.thoughts == ["a", "b", "c", "d"]
    assert "print('hi')" in result.analysis
