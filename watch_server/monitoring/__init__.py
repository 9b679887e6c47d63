"""Prometheus monitoring."""

from watch_server.monitoring.middleware import PrometheusMiddleware, mount_metrics

__all__ = ["PrometheusMiddleware", "mount_metrics"]
