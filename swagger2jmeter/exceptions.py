"""Custom exceptions for swagger2jmeter.

This module defines the exception hierarchy for swagger2jmeter.
All custom exceptions inherit from Swagger2JMeterException base class.

The translation core (endpoint extraction, base URL resolution and plan
serialization) never raises: malformed documents and unparseable URLs
degrade to best-effort output. These exceptions belong to the layers
around it (loading, configuration, selection and file output).
"""


class Swagger2JMeterException(Exception):
    """Base exception for all swagger2jmeter errors.

    All custom exceptions in swagger2jmeter inherit from this base class
    to allow catching all tool-specific errors.
    """

    pass


class SpecFetchException(Swagger2JMeterException):
    """Raised when a Swagger/OpenAPI document cannot be fetched.

    This exception is raised when:
    - The server answers with a non-2xx status
    - The connection fails or times out
    - The response body is neither JSON nor YAML
    """

    pass


class InvalidSpecException(Swagger2JMeterException):
    """Raised when a local specification file cannot be read.

    This exception is raised when:
    - The file extension is not .json, .yaml or .yml
    - The file content has invalid JSON or YAML syntax
    """

    pass


class PlanConfigException(Swagger2JMeterException):
    """Raised when a load plan configuration file is invalid.

    This exception is raised when:
    - YAML syntax is invalid
    - The document is not a mapping
    - Numeric settings are not numbers
    - The headers section is malformed
    """

    pass


# Selection Exceptions


class SelectionException(Swagger2JMeterException):
    """Base exception for endpoint selection errors."""

    pass


class EmptySelectionException(SelectionException):
    """Raised when no endpoints are selected for generation.

    The plan serializer expects at least one endpoint, so an empty
    selection is rejected before it runs.
    """

    pass


class EndpointNotFoundException(SelectionException):
    """Raised when an endpoint selector matches nothing.

    This exception is raised when:
    - An index is out of range
    - No endpoint has the given METHOD /path combination
    - No endpoint carries the given tag

    Attributes:
        selector: The selector that did not match
    """

    def __init__(self, selector: str) -> None:
        """Initialize with the unmatched selector.

        Args:
            selector: Selector string as given by the user
        """
        self.selector = selector
        super().__init__(f"No endpoint matches selector '{selector}'")


class JMXGenerationException(Swagger2JMeterException):
    """Raised when the JMX file cannot be written.

    This exception is raised when:
    - The output directory cannot be created
    - The output file cannot be written
    """

    pass
