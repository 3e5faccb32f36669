# accounts/__init__.py
"""
Accounts app - platform users.

Provides the email-login User model (AUTH_USER_MODEL). Companies, jobs
and applications reference users by primary key only.
"""
