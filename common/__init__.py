"""
Shared pieces: JSON logging, YAML config, and the data types passed between
figma_api and map_store.
"""
