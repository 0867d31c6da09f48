"""
presign: pre-signed, time-limited URL authentication.

Signs an HTTP method + URL with a shared secret so a service can grant
tamper-evident, time-bounded access to a resource without a session lookup.
"""

__version__ = "1.0.0"
