"""Retrieval-then-generation discovery: similarity search followed by one curriculum prompt."""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from config.settings import settings
from content.errors import ContentServiceError
from content.generator import ProviderResolver
from content.llm_provider import get_provider
from content.prompt_templates import QUERY_ANALYSIS_PROMPT, RAG_DISCOVERY_PROMPT
from content.vector_store import VectorStoreService
from models.schemas import VectorDocument

logger = logging.getLogger(__name__)

MAX_THOUGHTS = 4
ANALYSIS_PREVIEW_CHARS = 200

_FENCED_BLOCK = re.compile(r"```(?:json)?[ \t]*\n(.*)```", re.DOTALL)


@dataclass
class DiscoveryResult:
    query: str
    documents: List[VectorDocument] = field(default_factory=list)
    thoughts: List[str] = field(default_factory=list)
    analysis: Optional[str] = None
    curriculumStructure: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'documents': [doc.model_dump() for doc in self.documents],
            'thoughts': self.thoughts,
            'analysis': self.analysis,
            'curriculumStructure': self.curriculumStructure,
            'query': self.query,
        }


def parse_json_response(text: str) -> Dict[str, Any]:
    """
    Parse a provider response as a JSON object.

    Bare JSON is tried first. Otherwise the text between the first ```json
    or ``` fence and the last closing fence is parsed, so fences quoted
    inside JSON strings are left alone.

    Raises:
        ValueError: If the text is not a JSON object
    """
    content = text.strip()
    try:
        data = json.loads(content)
    except ValueError:
        fenced = _FENCED_BLOCK.search(content)
        if fenced is None:
            raise
        data = json.loads(fenced.group(1).strip())

    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


def no_results_thoughts(query: str) -> List[str]:
    return [f'No relevant educational content found for query: "{query}"']


def parse_failure_thoughts(query: str) -> List[str]:
    return [
        f'Analyzing query intent: educational content discovery for "{query}"',
        'Reviewing retrieved documents for relevant educational concepts and materials',
        'Formulating structured curriculum based on user needs and available content',
        'Finalizing recommended learning path with appropriate modules and assessments',
    ]


def retrieval_only_thoughts(query: str) -> List[str]:
    return [
        f'Analyzing query intent: educational content discovery for "{query}"',
        'Performing vector similarity search across educational content database',
        'Generating curriculum options based on retrieved content and user learning objectives',
        'Finalizing curriculum structure with appropriate learning materials, exercises, and assessments',
    ]


class DiscoveryService:
    """Turn a free-text query into retrieved documents plus a curriculum recommendation."""

    def __init__(
        self,
        vector_store: VectorStoreService,
        provider_resolver: Optional[ProviderResolver] = None
    ):
        self.vector_store = vector_store
        self.provider_resolver = provider_resolver or get_provider
        self.temperature = settings.ANALYSIS_TEMPERATURE
        logger.info("DiscoveryService initialized")

    async def discover(self, query: str, limit: Optional[int] = None) -> DiscoveryResult:
        """
        Run retrieval then one generation call over the retrieved documents.

        Malformed provider JSON is downgraded to a deterministic placeholder
        result. A failed provider call falls back to the retrieval results
        with a fixed reasoning list.
        """
        search = await self.vector_store.search(query, limit)
        documents: List[VectorDocument] = search['documents']

        if not documents:
            logger.info(f"No documents found for '{query}', skipping generation")
            return DiscoveryResult(query=query, thoughts=no_results_thoughts(query))

        try:
            response_text = await self._complete(
                RAG_DISCOVERY_PROMPT.format_messages(
                    query=query,
                    document_context=self.format_document_context(documents),
                )
            )
        except ContentServiceError as e:
            logger.error(f"Error in RAG processing for '{query}': {e}")
            return DiscoveryResult(
                query=query,
                documents=documents,
                thoughts=retrieval_only_thoughts(query),
            )

        return DiscoveryResult(query=query, documents=documents, **self.shape_response(query, response_text))

    async def analyze_query(self, query: str) -> Dict[str, str]:
        """Plain-text analysis of the educational need behind a query."""
        analysis = await self._complete(QUERY_ANALYSIS_PROMPT.format_messages(query=query))
        return {'analysis': analysis, 'query': query}

    def shape_response(self, query: str, response_text: str) -> Dict[str, Any]:
        """Extract analysis, curriculum structure and thoughts from the provider text."""
        try:
            parsed = parse_json_response(response_text)
        except ValueError as e:
            logger.warning(f"Failed to parse RAG response as JSON: {e}")
            preview = response_text[:ANALYSIS_PREVIEW_CHARS]
            return {
                'analysis': f"{preview}...",
                'curriculumStructure': {
                    'title': f"Curriculum for {query}",
                    'description': 'Generated curriculum based on your query',
                    'modules': []
                },
                'thoughts': parse_failure_thoughts(query),
            }

        thoughts = parsed.get('thoughts')
        if isinstance(thoughts, list) and thoughts:
            thoughts = [str(t) for t in thoughts[:MAX_THOUGHTS]]
        else:
            thoughts = parse_failure_thoughts(query)

        analysis = parsed.get('analysis')
        return {
            'analysis': analysis if analysis is None or isinstance(analysis, str) else json.dumps(analysis),
            'curriculumStructure': parsed.get('curriculumStructure'),
            'thoughts': thoughts,
        }

    def format_document_context(self, documents: List[VectorDocument]) -> str:
        blocks = []
        for index, doc in enumerate(documents, start=1):
            blocks.append(
                f"Document {index} ({doc.title}, Similarity: {doc.similarity * 100:.1f}%):\n"
                f"Type: {doc.type}\n"
                f"Snippet: {doc.snippet}"
            )
        return "\n\n".join(blocks)

    async def _complete(self, messages) -> str:
        provider, api_model = self.provider_resolver(settings.DEFAULT_MODEL)
        return await provider.complete(messages, api_model, self.temperature)
