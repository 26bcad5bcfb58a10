class TDControlError(Exception):
    pass


class NotInitializedError(TDControlError):
    pass


class BoundednessError(TDControlError):
    pass


class DimensionError(TDControlError):
    pass


class ZeroProbabilityActionError(TDControlError):
    pass
