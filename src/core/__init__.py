"""Core domain package for activitybox.

Core contains event serialization, summary building, and the change-gated
publish logic without any HTTP-specific code, keeping the business logic
portable.
"""
