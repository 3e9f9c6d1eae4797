"""
Cloud Functions Handlers Module.

This module contains the adapter between the Cloud Functions host and the
function catalog:

1. Resolver: resolves the function to serve, once, at cold start
2. HTTP handler: request headers and body in, status, headers and body out
3. Background handler: event payload and context in, result logged and dropped

Import ``FunctionInvoker`` from ``function_adapter.handlers.function_invoker``.
"""
