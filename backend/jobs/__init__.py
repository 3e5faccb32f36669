# jobs/__init__.py
"""Jobs app - job postings owned by verified companies."""
