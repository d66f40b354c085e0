"""Pytest configuration: Hypothesis profile for the property-based tests."""

from hypothesis import HealthCheck, settings

# Hypothesis's one-time cold-cache setup can exceed the input-generation
# time budget on the first run in a clean checkout.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")
