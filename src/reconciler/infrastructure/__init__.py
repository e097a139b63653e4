"""Infrastructure shared by every bounded context.

Logging, settings, AWS client construction and observability plumbing live
here. Bounded contexts depend on this package; it never depends on them.
"""
