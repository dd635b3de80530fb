"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class SearchBackendError(ServiceError):
    """Raised by lookup adapters when the data source fails."""


class ResolverClosedError(ServiceError):
    pass
