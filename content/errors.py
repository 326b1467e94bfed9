"""Exceptions raised by the content services."""


class ContentServiceError(Exception):
    """Base class for content service failures."""


class ProviderError(ContentServiceError):
    """A generative provider call failed or returned nothing usable."""


class UnknownModelError(ContentServiceError):
    """The requested model id is not in the model registry."""


class ContentGenerationError(ContentServiceError):
    """Terminal failure of a generation request."""


class ContentModificationError(ContentServiceError):
    """Terminal failure of a modification request."""


class ContentNotFoundError(ContentServiceError):
    """Reference to a content or curriculum id that does not exist."""

    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} with id {resource_id} not found")
