"""
Custom authentication backend for token-based auth.

Subclasses Django REST framework's ``TokenAuthentication`` so the
project configuration has a stable import path.  Keeping this apart from
the login views avoids circular imports when DRF loads its
authentication classes.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """Token authentication using the ``Token`` keyword."""

    keyword = 'Token'
