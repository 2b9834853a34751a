from abc import ABC, abstractmethod

from healthreport.models.health import HealthcheckResult


class BaseHealthCheck(ABC):
    """Abstract base class for class-based healthchecks.

    Instances are probes: calling one evaluates ``check()``, so they can be
    placed directly in a healthcheck mapping.
    """

    @abstractmethod
    async def check(self) -> HealthcheckResult:
        """
        Perform the health check.

        Returns:
            HealthcheckResult: The result of the health check containing status and timing.
        """
        pass

    async def __call__(self) -> HealthcheckResult:
        return await self.check()
