"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from weather_data import Observation


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class RemoteFetchError(WeatherProviderError):
    """
    A remote lookup failed: network error, non-2xx status or malformed payload.

    Attributes:
        status: HTTP status code, or "unknown" when no response was received
        message: Human readable reason
    """

    def __init__(self, message: str, status: Union[int, str] = "unknown"):
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        return f"[{self.status}] {self.message}"


@dataclass(frozen=True)
class FetchSuccess:
    observation: Observation


@dataclass(frozen=True)
class FetchFailure:
    error: RemoteFetchError


FetchResult = Union[FetchSuccess, FetchFailure]


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city: str) -> Observation:
        """
        Fetch current weather for a city.

        Returns:
            Observation: Current weather and the provider's observation time

        Raises:
            RemoteFetchError: If the provider fails to fetch data
        """
        pass

    def fetch(self, city: str) -> FetchResult:
        """
        Like get_current(), but reports failure as a value instead of raising.

        Provider errors that aren't RemoteFetchError are wrapped in one.
        """
        try:
            return FetchSuccess(self.get_current(city))
        except RemoteFetchError as e:
            return FetchFailure(e)
        except WeatherProviderError as e:
            return FetchFailure(RemoteFetchError(str(e)))
