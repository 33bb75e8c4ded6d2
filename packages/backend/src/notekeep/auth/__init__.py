"""Authentication and authorization.

Users sign in with email/password and receive a signed, time-limited
access token. Every note request presents that token as a bearer
credential; the verified subject (the user's email) is the identity
passed explicitly into the note service.
"""
