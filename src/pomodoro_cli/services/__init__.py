"""Services wrapping the external programs a session talks to."""
