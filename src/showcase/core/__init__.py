"""Availability-aware content access layer.

Modules
-------
errors      Typed error hierarchy and HTTP status mapping
logging     structlog configuration
settings    Environment-driven settings
probe       Cached store connectivity
kinds       ResourceKind descriptor and registry
catalog     Static fallback catalog lookup
repository  Session-scoped queries per kind
reader      Fallback / provisioning read path
writer      Validated, store-gated writes
envelope    Response envelope normalizer
security    Password hashing and bearer tokens
access      Composition root for all of the above
orm         SQLAlchemy base, engine factory and tables
"""
