"""
figmassets test suite

Structure:
- unit/: Unit tests for individual components (no network)
- integration/: Live Figma API tests, skipped unless FIGMA_TOKEN and FIGMA_FILE_KEY are set
"""
