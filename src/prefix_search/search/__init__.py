"""
Prefix search indexing and query package.

This package provides the in-memory search stack:
- analyzers: Space tokenizer, word normalizer, stop and length filters
- models: Word entries, per-text stats and expansion records
- indexer: Per-text word indexing
- collection: Inverted index and original-text key store
- expander: Trailing wildcard expansion of query tokens
- ranking: ALL/ANY matching and relevance scoring
"""
