"""
Feature Flags - Runtime configuration for the dialect converter.

Flags are read from environment variables so pool usage and metric
recording can be switched off without code changes.
"""

import os


class FeatureFlags:
    """
    Feature flags for the dialect converter.

    Environment Variables:
        FEATURE_MULTI_DIALECT_CONVERT_SERVICE: Default for the per-session
            switch that allows round-robin use of the service pool (default: true)
        FEATURE_CONVERTER_METRICS: Record conversion metrics (default: true)
    """

    ENABLE_MULTI_DIALECT_CONVERT_SERVICE = (
        os.getenv("FEATURE_MULTI_DIALECT_CONVERT_SERVICE", "true").lower() == "true"
    )

    ENABLE_METRICS = os.getenv("FEATURE_CONVERTER_METRICS", "true").lower() == "true"

    @classmethod
    def validate_configuration(cls) -> tuple[bool, list[str]]:
        """
        Validate feature flag configuration for potential issues.

        Returns:
            Tuple of (is_valid, warnings)
        """
        warnings = []

        if not cls.ENABLE_MULTI_DIALECT_CONVERT_SERVICE:
            warnings.append(
                "Service pool disabled by default - sessions without an explicit "
                "setting will leave SQL unconverted unless an override URL is set."
            )

        if not cls.ENABLE_METRICS:
            warnings.append(
                "Metrics collection disabled - conversion service outages will "
                "only be visible in logs."
            )

        return True, warnings

