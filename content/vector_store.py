"""Similarity search over the educational document corpus."""

import logging
from typing import Any, Dict, List, Optional

from config.settings import settings
from content.time_format import utcnow
from models.schemas import VectorDocument

logger = logging.getLogger(__name__)


SEED_DOCUMENTS: List[Dict[str, Any]] = [
    {
        'id': '1',
        'title': 'Python for Data Science Handbook',
        'type': 'Book',
        'similarity': 0.94,
        'snippet': 'Comprehensive guide covering Python data science libraries including pandas, numpy, matplotlib and scikit-learn.'
    },
    {
        'id': '2',
        'title': 'Introduction to NumPy and Pandas',
        'type': 'Course',
        'similarity': 0.91,
        'snippet': 'Learn the fundamentals of NumPy arrays and pandas DataFrames for efficient data manipulation and analysis.'
    },
    {
        'id': '3',
        'title': 'Data Visualization with Matplotlib',
        'type': 'Module',
        'similarity': 0.87,
        'snippet': "Learn to create effective visualizations of data using Python's matplotlib library."
    },
    {
        'id': '4',
        'title': 'Python Programming Fundamentals',
        'type': 'Course',
        'similarity': 0.92,
        'snippet': 'Introduction to Python programming language, covering basic syntax, data types, and control structures.'
    },
    {
        'id': '5',
        'title': 'Data Science with Python',
        'type': 'Learning Path',
        'similarity': 0.87,
        'snippet': 'Comprehensive path covering Python libraries for data analysis including pandas, numpy, and scikit-learn.'
    },
    {
        'id': '6',
        'title': 'Machine Learning Basics',
        'type': 'Module',
        'similarity': 0.82,
        'snippet': 'Fundamental concepts in machine learning with Python implementations of common algorithms.'
    },
]


class VectorStoreService:
    """Keyword-filtered similarity search over a document corpus."""

    VECTOR_DIMENSIONS = 1536
    INDEX_TYPE = 'cosine'
    INDEX_NAME = 'educational-content'

    def __init__(self, documents: Optional[List[Dict[str, Any]]] = None):
        seed = SEED_DOCUMENTS if documents is None else documents
        self.documents: List[VectorDocument] = [VectorDocument(**doc) for doc in seed]
        self.last_updated = utcnow()
        logger.info(f"VectorStoreService initialized with {len(self.documents)} documents")

    def add_document(self, document: VectorDocument):
        """Append a document to the corpus; corpus order is the tie-break order."""
        self.documents.append(document)
        self.last_updated = utcnow()

    async def search(self, query: str, limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Find documents whose title or snippet contains the query.

        Results are ranked by similarity descending. The sort is stable, so
        documents with equal similarity keep their corpus order.

        Args:
            query: Free-text query
            limit: Maximum documents to return

        Returns:
            Dict with 'documents' and 'totalFound'
        """
        limit = limit or settings.DEFAULT_SEARCH_LIMIT
        needle = (query or '').strip().lower()

        matches = [
            doc for doc in self.documents
            if needle in doc.title.lower() or needle in doc.snippet.lower()
        ]
        ranked = sorted(matches, key=lambda doc: doc.similarity, reverse=True)[:limit]

        logger.info(f"Vector search for '{query}' returned {len(ranked)} documents")
        return {
            'documents': ranked,
            'totalFound': len(ranked)
        }

    async def get_stats(self) -> Dict[str, Any]:
        return {
            'documentCount': len(self.documents),
            'vectorDimensions': self.VECTOR_DIMENSIONS,
            'indexType': self.INDEX_TYPE,
            'lastUpdated': self.last_updated.isoformat()
        }

    async def get_status(self) -> Dict[str, Any]:
        return {
            'status': 'connected',
            'provider': 'in-memory',
            'indexName': self.INDEX_NAME,
            'healthy': True
        }
