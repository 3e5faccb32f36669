# topics/__init__.py
"""Topics app - tags attached to job postings."""
