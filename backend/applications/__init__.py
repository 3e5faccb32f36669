# applications/__init__.py
"""Applications app - job applications and their status workflow."""
