# companies/__init__.py
"""
Companies app - companies, memberships and the authorization policies
shared by the jobs and applications apps.
"""
