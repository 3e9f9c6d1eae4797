"""
Centralized observability utilities for the function adapter.

This module provides the configured AWS Lambda Powertools logger shared by the
catalog, the resolver and the invocation handlers. Powertools' structured JSON
logger runs unchanged on Cloud Functions, where stdout is shipped to Cloud Logging.
"""

from aws_lambda_powertools.logging import Logger

# Header set by the Cloud Functions front end on every HTTP request
TRACE_CONTEXT_HEADER = 'X-Cloud-Trace-Context'

# JSON output format, service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
# Log level can be set by environment variable "LOG_LEVEL"
logger: Logger = Logger()
