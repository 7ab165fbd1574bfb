"""Web frontend for the materials extractor."""
