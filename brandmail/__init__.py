"""Brand-consistent, email-client-safe HTML email builder."""

__version__ = "0.1.0"
