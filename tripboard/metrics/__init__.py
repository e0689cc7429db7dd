"""Provider call metrics."""

from tripboard.metrics.core import ProviderErrorKind, record_provider_call

__all__ = ["ProviderErrorKind", "record_provider_call"]
