# core/__init__.py
"""
Shared building blocks: error taxonomy, slug allocation, blob storage
and payload helpers. No models live here.
"""
