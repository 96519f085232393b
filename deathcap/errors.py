"""Exceptions raised by the restaurant engine and sheet presenter."""


class EngineError(Exception):
    pass


class UnknownLocationError(EngineError):
    """A location key that is not one of the five challenges."""


class RestaurantNotFoundError(EngineError):
    pass


class SheetError(Exception):
    pass
