class EnergySeriesError(Exception): ...


class NormalizeError(EnergySeriesError): ...


class IntervalHintError(NormalizeError): ...


class UnitError(NormalizeError): ...


class CanonError(EnergySeriesError): ...


class IngestError(EnergySeriesError): ...


class ConfigError(EnergySeriesError): ...


def require(condition: bool, message: str, exc: type[EnergySeriesError] = EnergySeriesError):
    """Raise the given exception if condition is False."""
    if not condition:
        raise exc(message)
