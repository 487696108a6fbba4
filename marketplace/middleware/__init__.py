from .tracing import TracingMiddleware

__all__ = ["TracingMiddleware"]
