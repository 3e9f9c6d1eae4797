"""
Environment variable models for type-safe adapter configuration.

The adapter is configured exclusively through the process environment of the
Cloud Functions instance. Values are parsed once, at cold start.
"""

from typing import Annotated, Literal

from aws_lambda_env_modeler import get_environment_variables
from pydantic import BaseModel, Field


class AdapterEnvVars(BaseModel):
    """Environment variables for the function adapter."""

    # Function definition to invoke, empty means "use the routing function"
    FUNCTION_DEFINITION: Annotated[str, Field(
        default='',
        description='Registered function name or composition (e.g. "uppercase|reverse")'
    )] = ''

    # JSON codec used for payload conversion
    JSON_MAPPER: Annotated[Literal['json', 'pydantic'], Field(
        default='json',
        description='JSON mapper implementation (json/pydantic)'
    )] = 'json'

    # Module imported at cold start so its @function decorators run
    FUNCTION_MODULE: Annotated[str, Field(
        default='',
        description='Dotted path of the module that registers user functions'
    )] = ''

    # Service name for observability
    POWERTOOLS_SERVICE_NAME: Annotated[str, Field(
        default='gcf-function-adapter',
        description='Service name for AWS Powertools'
    )] = 'gcf-function-adapter'

    # Log level for AWS Powertools Logger
    LOG_LEVEL: Annotated[str, Field(
        default='INFO',
        description='Log level for application logging',
        pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$'
    )] = 'INFO'

    @property
    def uses_router(self) -> bool:
        """Check if no explicit function definition was configured."""
        return not self.FUNCTION_DEFINITION.strip()


def get_adapter_env_vars() -> AdapterEnvVars:
    """
    Get typed environment variables for the adapter.

    Returns:
        Validated environment variables model instance
    """
    return get_environment_variables(model=AdapterEnvVars)
