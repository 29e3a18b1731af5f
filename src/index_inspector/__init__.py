"""Index inspection pipeline: check Search Console indexing status for a URL list."""
