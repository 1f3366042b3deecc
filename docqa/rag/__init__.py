"""Retrieval components of the question answering pipeline.

This package contains modules for:
- Word-count document chunking
- Cosine similarity over embedding vectors
- Top-k relevance ranking
- Batched, paced embedding generation
"""
