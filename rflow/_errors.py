__all__ = (
    "ConfigurationError",
    "InvalidStateError",
    "ProcessorError",
    "ReentrantDispatchError",
)


class ProcessorError(Exception):
    pass


class ConfigurationError(ProcessorError):
    pass


class ReentrantDispatchError(ProcessorError):
    pass


class InvalidStateError(ProcessorError):
    pass
